# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import uvicorn

from app.common.logging import app_logger
from app.infra.config import settings
from app.main import API_PREFIX, app


def main() -> None:
    base = f"http://localhost:{settings.PORT}"
    app_logger.log(f"Application is running on: {base}{API_PREFIX}", "Bootstrap")
    app_logger.log(f"Swagger UI is running on: {base}/api/docs", "Bootstrap")
    app_logger.log(f"Redoc documentation is running on: {base}/api/redoc", "Bootstrap")

    # log_config=None：uvicorn 日志走根 logger 的 JSON handler
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()

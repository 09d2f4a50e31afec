# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from app.common.logging import app_logger, setup_logging
from app.infra.db import Base, engine
from app.domain import models  # noqa: F401


def init_db() -> None:
    setup_logging()
    app_logger.log("Creating tables...", "InitDb")
    Base.metadata.create_all(bind=engine)
    app_logger.log("Done.", "InitDb")


if __name__ == "__main__":
    init_db()

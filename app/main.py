# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import health as health_api, users as users_api
from app.common.exception_handlers import register_exception_handlers
from app.common.logging import app_logger, parse_log_levels, setup_logging
from app.common.middlewares import TRACE_HEADER, TraceIdMiddleware
from app.infra.config import settings

API_PREFIX = "/api/v1"

setup_logging()

# 日志等级白名单（LOG_LEVELS 为空时保持全部开启）
_levels = parse_log_levels(settings.LOG_LEVELS)
if _levels:
    app_logger.set_log_levels(_levels)

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_url="/api/docs-json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


# ---------- middlewares / handlers ----------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[TRACE_HEADER],
)
# 最后添加的在最外层：trace 作用域覆盖整个请求
app.add_middleware(TraceIdMiddleware)

register_exception_handlers(app)


app.include_router(health_api.router, prefix=API_PREFIX)

# 用户
app.include_router(users_api.router, prefix=API_PREFIX)

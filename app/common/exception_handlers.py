# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.common.envelope import INTERNAL_ERROR_MESSAGE, build_error_envelope, request_path, resolve_error_message
from app.common.errors import AppError
from app.common.validation import describe_errors
from app.infra.config import settings

logger = logging.getLogger(__name__)


def _err_response(request: Request, status_code: int, raw: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error_envelope(
            status_code=status_code,
            path=request_path(request),
            message=resolve_error_message(raw, production=settings.is_production),
        ),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.detail)
    return _err_response(request, exc.status_code, exc.to_payload())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _err_response(request, exc.status_code, exc.detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _err_response(
        request,
        400,
        {
            "statusCode": 400,
            "error": "Bad Request",
            "message": describe_errors(exc.errors()),
        },
    )


def internal_error_response(request: Request) -> JSONResponse:
    return _err_response(request, 500, INTERNAL_ERROR_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 没有 TraceIdMiddleware 兜底时才会走到这里
    logger.exception("Unhandled error")
    return internal_error_response(request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

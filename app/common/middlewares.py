# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import traceback
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.common.exception_handlers import internal_error_response
from app.common.logging import app_logger
from app.common.trace import trace_scope

TRACE_HEADER = "X-Request-Id"


class TraceIdMiddleware(BaseHTTPMiddleware):
    """每个请求一个 trace 作用域，请求结束即销毁

    未处理异常在作用域内记录并转成 500 错误结构，日志 rid 与响应头保持一致
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        with trace_scope(request.headers.get(TRACE_HEADER)) as trace_id:
            try:
                response: Response = await call_next(request)
            except Exception as e:
                app_logger.error(
                    f"Unhandled error: {type(e).__name__}: {e}",
                    trace=traceback.format_exc(),
                    context=type(self).__name__,
                )
                response = internal_error_response(request)
        response.headers[TRACE_HEADER] = trace_id
        return response

# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""路由级横切配置

注册路由时显式传入 RouteOptions：

    router.add_api_route(
        "", create_user, methods=["POST"], status_code=201,
        options=RouteOptions(
            logging=LogAction("Create user", "log"),
            response_message="User created successfully",
        ),
    )

AppRoute 按 endpoint 查表取配置：外层记录进入/退出日志，内层把返回值包装成统一响应。
"""

from __future__ import annotations

import json
import time
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Dict, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

from app.common.envelope import ApiResult, build_success_envelope, request_path
from app.common.logging import app_logger


@dataclass(frozen=True)
class LogAction:
    message: str = "Action"
    level: str = "log"


@dataclass(frozen=True)
class RouteOptions:
    logging: Optional[LogAction] = None
    response_message: Optional[str] = None
    response_code: Optional[int] = None


_DEFAULT_OPTIONS = RouteOptions()
_route_options: Dict[Callable[..., Any], RouteOptions] = {}


def register_route_options(endpoint: Callable[..., Any], options: RouteOptions) -> None:
    _route_options[endpoint] = options


def get_route_options(endpoint: Callable[..., Any]) -> RouteOptions:
    return _route_options.get(endpoint, _DEFAULT_OPTIONS)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class AppRoute(APIRoute):
    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handle = super().get_route_handler()

        async def app_route_handler(request: Request) -> Response:
            options = get_route_options(self.endpoint)
            action = options.logging
            if action is None:
                return self.wrap_response(request, await handle(request), options)

            method = request.method
            path = request_path(request)
            app_logger.emit(action.level, f"[ENTER] {method} {path} - {action.message}", self.name)

            started = time.perf_counter()
            try:
                response = self.wrap_response(request, await handle(request), options)
            except Exception as e:
                # 异常出口固定用 error 等级，异常继续抛给全局异常处理
                app_logger.error(
                    f"[EXIT] {method} {path} - {action.message} (+{_elapsed_ms(started)}ms)"
                    f" - Error: {str(e) or type(e).__name__}",
                    trace=traceback.format_exc(),
                    context=self.name,
                )
                raise

            app_logger.emit(
                action.level,
                f"[EXIT] {method} {path} {response.status_code} - {action.message} (+{_elapsed_ms(started)}ms)",
                self.name,
            )
            return response

        return app_route_handler

    def wrap_response(self, request: Request, response: Response, options: RouteOptions) -> Response:
        """handler 返回值 -> {statusCode, message, data, timestamp, path}"""
        path = request_path(request)

        if isinstance(response, ApiResult):
            envelope = build_success_envelope(
                response.data,
                path=path,
                message=response.message,
                status_code=response.code,
            )
            return JSONResponse(envelope, status_code=self.status_code or 200, background=response.background)

        # 非 JSON 响应（文件、流等）原样返回
        if not isinstance(response, JSONResponse):
            return response

        data = json.loads(response.body) if response.body else None
        envelope = build_success_envelope(
            data,
            path=path,
            message=options.response_message,
            status_code=options.response_code or response.status_code,
        )
        headers = {
            k: v for k, v in response.headers.items() if k.lower() not in ("content-length", "content-type")
        }
        return JSONResponse(
            envelope,
            status_code=response.status_code,
            headers=headers,
            background=response.background,
        )


class AppRouter(APIRouter):
    """默认使用 AppRoute；add_api_route 支持 options"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("route_class", AppRoute)
        super().__init__(*args, **kwargs)

    def add_api_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        *,
        options: Optional[RouteOptions] = None,
        **kwargs: Any,
    ) -> None:
        if options is not None:
            register_route_options(endpoint, options)
        super().add_api_route(path, endpoint, **kwargs)

# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""统一响应结构

成功：{statusCode, message, data, timestamp, path}
失败：{statusCode, timestamp, path, message}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.requests import Request

DEFAULT_SUCCESS_MESSAGE = "Success"
INTERNAL_ERROR_MESSAGE = "Internal server error"

T = TypeVar("T")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def request_path(request: Request) -> str:
    """框架看到的请求 URL（path + query）"""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class ApiResult(JSONResponse, Generic[T]):
    """handler 直接返回的预构建结果，code / message / data 原样进入响应包装

    本身也是一个 JSONResponse，脱离 AppRoute 使用时按 {code, message, data} 输出
    """

    def __init__(self, code: int, message: str, data: Optional[T] = None) -> None:
        self.code = code
        self.message = message
        self.data = jsonable_encoder(data)
        super().__init__(content={"code": code, "message": message, "data": self.data}, status_code=code)

    @classmethod
    def success(cls, data: Optional[T] = None, message: str = DEFAULT_SUCCESS_MESSAGE, code: int = 200) -> "ApiResult[T]":
        return cls(code, message, data)

    @classmethod
    def custom(cls, message: str, code: int, data: Optional[T] = None) -> "ApiResult[T]":
        return cls(code, message, data)


def build_success_envelope(
    data: Any,
    *,
    path: str,
    message: Optional[str] = None,
    status_code: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "statusCode": status_code or 200,
        "message": message or DEFAULT_SUCCESS_MESSAGE,
        "data": data,
        "timestamp": now_iso(),
        "path": path,
    }


def build_error_envelope(*, status_code: int, path: str, message: str) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "timestamp": now_iso(),
        "path": path,
        "message": message,
    }


def resolve_error_message(raw: Any, *, production: bool) -> str:
    """错误体 -> 单条 message

    1) 字符串直接用
    2) message 是列表：用 ", " 拼接
    3) message 是字符串：直接用
    4) 其它：非生产环境序列化整个错误体便于排查，生产环境统一 Internal server error
    """
    if isinstance(raw, str):
        return raw
    if raw is None:
        return INTERNAL_ERROR_MESSAGE

    if isinstance(raw, Mapping):
        m = raw.get("message")
        if isinstance(m, (list, tuple)):
            return ", ".join(str(x) for x in m)
        if isinstance(m, str):
            return m

    if production:
        return INTERNAL_ERROR_MESSAGE
    return json.dumps(jsonable_encoder(raw), ensure_ascii=False, default=str)

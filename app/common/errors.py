# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Union


@dataclass
class AppError(Exception):
    """异常统一

    message 可以是单条文本，也可以是多条（如字段校验错误），渲染时再合并；
    message 为 None 时只在非生产环境输出 detail
    """
    code: str
    message: Optional[Union[str, List[str]]]
    status_code: int = 400
    detail: Optional[Any] = None

    def __str__(self) -> str:
        if isinstance(self.message, list):
            return ", ".join(self.message)
        return self.message or self.code

    def to_payload(self) -> Dict[str, Any]:
        """HTTP 错误体：{statusCode, error, message?, detail?}"""
        payload: Dict[str, Any] = {
            "statusCode": self.status_code,
            "error": _reason(self.status_code),
        }
        if self.message is not None:
            payload["message"] = self.message
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class BadRequestError(AppError):
    def __init__(self, code: str = "BAD_REQUEST", message: str = "bad request", detail: Any = None) -> None:
        super().__init__(code=code, message=message, status_code=400, detail=detail)


class ValidationFailedError(AppError):
    def __init__(self, messages: List[str], code: str = "VALIDATION_FAILED", detail: Any = None) -> None:
        super().__init__(code=code, message=list(messages), status_code=400, detail=detail)


class NotFoundError(AppError):
    def __init__(self, code: str = "NOT_FOUND", message: str = "not found", detail: Any = None) -> None:
        super().__init__(code=code, message=message, status_code=404, detail=detail)


class ConflictError(AppError):
    def __init__(
        self,
        code: str = "CONFLICT",
        message: str = "Entity with this unique field already exists",
        detail: Any = None,
    ) -> None:
        super().__init__(code=code, message=message, status_code=409, detail=detail)


class StorageError(AppError):
    """存储层的其它失败；不带 message，生产环境统一显示 Internal server error"""

    def __init__(self, code: str = "STORAGE_ERROR", detail: Any = None) -> None:
        super().__init__(code=code, message=None, status_code=500, detail=detail)

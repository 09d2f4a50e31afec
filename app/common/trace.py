# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

SYSTEM_TRACE_ID = "system"

_trace_id_ctx: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)


def new_trace_id() -> str:
    return uuid.uuid4().hex


def set_trace_id(trace_id: str) -> Token:
    return _trace_id_ctx.set(trace_id or new_trace_id())


def reset_trace_id(token: Token) -> None:
    _trace_id_ctx.reset(token)


def get_trace_id() -> str:
    """当前请求的 trace_id；不在请求范围内（如启动阶段）返回 system"""
    return _trace_id_ctx.get() or SYSTEM_TRACE_ID


@contextmanager
def trace_scope(trace_id: Optional[str] = None) -> Iterator[str]:
    """开启一个 trace 作用域，退出时恢复之前的值"""
    token = set_trace_id(trace_id or new_trace_id())
    try:
        yield get_trace_id()
    finally:
        reset_trace_id(token)

# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, Dict, List, Sequence

# loc 的第一段是参数来源，不属于字段名
_LOC_SOURCES = ("body", "query", "path", "header", "cookie")

# EmailStr 校验失败的 msg 前缀
_INVALID_EMAIL_PREFIX = "value is not a valid email address"


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(x) for x in loc]
    if parts and parts[0] in _LOC_SOURCES:
        parts = parts[1:]
    return ".".join(parts) or "value"


def describe_error(err: Dict[str, Any]) -> str:
    field = _field_name(err.get("loc") or ())
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}

    if kind == "missing":
        return f"{field} should not be empty"
    if kind == "extra_forbidden":
        return f"property {field} should not exist"
    if kind == "string_type":
        return f"{field} must be a string"
    if kind == "string_too_short":
        return f"{field} must be longer than or equal to {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"{field} must be shorter than or equal to {ctx.get('max_length')} characters"
    if kind == "uuid_parsing" or kind == "uuid_type":
        return "Validation failed (uuid is expected)"
    if kind in ("json_invalid", "model_attributes_type", "dict_type"):
        return "request body must be a JSON object"
    if kind == "value_error" and str(err.get("msg", "")).startswith(_INVALID_EMAIL_PREFIX):
        return f"{field} must be an email"
    if kind == "value_error" and ctx.get("error") is not None:
        return f"{field} {ctx['error']}"
    return f"{field} {err.get('msg', 'is invalid')}"


def describe_errors(errors: Sequence[Dict[str, Any]]) -> List[str]:
    """pydantic 错误列表 -> 可读的字段错误文本"""
    return [describe_error(e) for e in errors]


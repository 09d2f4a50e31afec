# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, Dict, Mapping

import bcrypt

from app.application.crud.service import CrudService
from app.domain import models
from app.infra.config import settings
from app.infra.repository import SqlAlchemyRepository

# bcrypt 只使用前 72 字节，新版本对超长输入直接报错
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """bcrypt 哈希，结果形如 $2b$<rounds>$..."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def to_user_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """请求字段 -> 表字段：password 只以 hash 形式落库；users 表字段都非空，显式 null 视为未提交"""
    fields = {k: v for k, v in payload.items() if k != "password" and v is not None}
    if payload.get("password") is not None:
        fields["password_hash"] = hash_password(payload["password"])
    return fields


def build_user_service() -> CrudService[models.User]:
    return CrudService(SqlAlchemyRepository(models.User), entity_name="User")

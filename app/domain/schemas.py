# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")


def _check_strong_password(v: str) -> str:
    """至少 8 位，包含大小写字母、数字和符号"""
    if (
        len(v) < 8
        or not re.search(r"[a-z]", v)
        or not re.search(r"[A-Z]", v)
        or not re.search(r"[0-9]", v)
        or not _SYMBOL_RE.search(v)
    ):
        raise ValueError("is not strong enough")
    return v


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=2, max_length=50, examples=["John Doe"])
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["StrongP@ssw0rd!"])
    role: Optional[str] = Field(None, max_length=20, examples=["user"])

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_strong_password(v)


class UserUpdate(BaseModel):
    """PATCH：只有显式提交的字段会被更新"""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[str] = Field(None, max_length=20)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_strong_password(v)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    email: str
    role: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

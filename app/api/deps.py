# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from app.application.crud.service import CrudService
from app.application.users.service import build_user_service
from app.domain import models
from app.infra.db import get_db

__all__ = ["get_db", "get_user_service"]

_user_service_singleton = build_user_service()


def get_user_service() -> CrudService[models.User]:
    return _user_service_singleton

# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from app.common.routing import AppRouter


router = AppRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    return {"status": "ok"}

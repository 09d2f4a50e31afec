# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Sequence, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


class Repository(Protocol[T]):
    """通用 CRUD 仓库接口

    - 查不到时返回 None，不抛 not found
    - 唯一约束冲突抛 ConflictError，其它存储失败抛 StorageError
    """

    def create(self, db: Session, data: Mapping[str, Any]) -> T:
        ...

    def find_all(self, db: Session, *, relations: Sequence[str] = ()) -> List[T]:
        ...

    def find_one(self, db: Session, entity_id: str, *, relations: Sequence[str] = ()) -> Optional[T]:
        ...

    def update(self, db: Session, entity_id: str, data: Mapping[str, Any]) -> Optional[T]:
        ...

    def remove(self, db: Session, entity_id: str) -> Optional[T]:
        ...

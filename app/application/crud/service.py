# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, Generic, List, Mapping, Sequence, TypeVar

from sqlalchemy.orm import Session

from app.common.errors import NotFoundError
from app.domain.ports import Repository

T = TypeVar("T")


class CrudService(Generic[T]):
    """通用 CRUD 业务层：仓库返回 None 时统一转成 NotFoundError"""

    def __init__(self, repository: Repository[T], entity_name: str = "Entity") -> None:
        self._repo = repository
        self.entity_name = entity_name

    def create(self, db: Session, data: Mapping[str, Any]) -> T:
        return self._repo.create(db, data)

    def find_all(self, db: Session, *, relations: Sequence[str] = ()) -> List[T]:
        return self._repo.find_all(db, relations=relations)

    def find_one(self, db: Session, entity_id: str, *, relations: Sequence[str] = ()) -> T:
        entity = self._repo.find_one(db, entity_id, relations=relations)
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    def update(self, db: Session, entity_id: str, data: Mapping[str, Any]) -> T:
        entity = self._repo.update(db, entity_id, data)
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    def remove(self, db: Session, entity_id: str) -> T:
        entity = self._repo.remove(db, entity_id)
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    def _not_found(self, entity_id: str) -> NotFoundError:
        return NotFoundError(
            code=f"{self.entity_name.upper()}_NOT_FOUND",
            message=f"{self.entity_name} with ID {entity_id} not found",
        )

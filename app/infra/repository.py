# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""基于 SQLAlchemy 的通用仓库

按实体组合使用：SqlAlchemyRepository(models.User)，不需要为每个实体写子类。
每个写操作都是一次 load + 修改 + commit，失败时整体回滚。
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Sequence, Set, Type, TypeVar

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.common.errors import ConflictError, StorageError
from app.domain.models import IMMUTABLE_FIELDS

T = TypeVar("T")


def is_unique_violation(exc: IntegrityError) -> bool:
    """PostgreSQL 23505 / MySQL 1062 / SQLite UNIQUE constraint failed"""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False

    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == "23505":
        return True

    args = getattr(orig, "args", ())
    if args and args[0] == 1062:
        return True

    return "UNIQUE constraint failed" in str(orig)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, model: Type[T]) -> None:
        self.model = model
        mapper = sa_inspect(model)
        self._writable: Set[str] = {a.key for a in mapper.column_attrs} - IMMUTABLE_FIELDS

    # ---------- 读 ----------

    def find_all(self, db: Session, *, relations: Sequence[str] = ()) -> List[T]:
        stmt = select(self.model).options(*self._load_options(relations))
        with self._translate_errors(db):
            return list(db.scalars(stmt).all())

    def find_one(self, db: Session, entity_id: str, *, relations: Sequence[str] = ()) -> Optional[T]:
        with self._translate_errors(db):
            return db.get(self.model, entity_id, options=self._load_options(relations))

    # ---------- 写 ----------

    def create(self, db: Session, data: Mapping[str, Any]) -> T:
        entity = self.model(**self._merge_fields(data))
        with self._translate_errors(db):
            db.add(entity)
            db.commit()
            db.refresh(entity)
        return entity

    def update(self, db: Session, entity_id: str, data: Mapping[str, Any]) -> Optional[T]:
        entity = self.find_one(db, entity_id)
        if entity is None:
            return None

        # 只覆盖 data 中出现的字段
        for key, value in self._merge_fields(data).items():
            setattr(entity, key, value)

        with self._translate_errors(db):
            db.commit()
            db.refresh(entity)
        return entity

    def remove(self, db: Session, entity_id: str) -> Optional[T]:
        entity = self.find_one(db, entity_id)
        if entity is None:
            return None

        # expire_on_commit=False，删除后实体上的字段仍可读
        with self._translate_errors(db):
            db.delete(entity)
            db.commit()
        return entity

    # ---------- 内部 ----------

    def _merge_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in data.items() if k in self._writable}

    def _load_options(self, relations: Sequence[str]) -> List[Any]:
        """relations: ["posts", "posts.comments"] -> selectinload 链"""
        options: List[Any] = []
        for path in relations:
            model: Any = self.model
            loader: Optional[Any] = None
            for name in path.split("."):
                mapper = sa_inspect(model)
                if name not in mapper.relationships:
                    raise ValueError(f"{model.__name__} has no relation {name!r}")
                attr = getattr(model, name)
                loader = selectinload(attr) if loader is None else loader.selectinload(attr)
                model = mapper.relationships[name].mapper.class_
            if loader is not None:
                options.append(loader)
        return options

    @contextmanager
    def _translate_errors(self, db: Session) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            db.rollback()
            if is_unique_violation(e):
                raise ConflictError(detail=str(e.orig)) from e
            raise StorageError(detail=str(e.orig)) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(detail=str(e)) from e

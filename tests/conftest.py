"""Shared fixtures: in-memory SQLite store and a TestClient on the real app."""

from __future__ import annotations

import os

# 必须在导入 app.* 之前设置：engine 在 app.infra.db 导入时创建
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["LOG_LEVELS"] = ""
os.environ["BCRYPT_ROUNDS"] = "4"

from typing import Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.domain import models  # noqa: F401,E402
from app.infra.db import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture
def schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(schema: None) -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(schema: None) -> Iterator[TestClient]:
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def user_payload() -> dict:
    return {
        "name": "John Doe",
        "email": "john@example.com",
        "password": "StrongP@ssw0rd!",
    }

# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("RUN_MIGRATIONS", "0")

from grouphub.dependencies.database import acquire_db_connection
from grouphub.main import app as fastapi_app

GROUP_ID = UUID("4f1c1d1e-8a55-4c3a-9a0e-6c1f0f7f2b11")
OWNER_ID = "user-owner"
CREATED_AT = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


class FakeTransaction:
    """Stands in for asyncpg's Transaction and records how the block ended."""

    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False

    async def __aenter__(self) -> "FakeTransaction":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.committed = True
        else:
            self.rolled_back = True
        return False


def make_group_row(**overrides) -> dict:
    row = {
        "id": GROUP_ID,
        "name": "Book Club",
        "slug": "book-club",
        "description": "Monthly reads",
        "topic": "books",
        "owner_id": OWNER_ID,
        "created_at": CREATED_AT,
    }
    row.update(overrides)
    return row


def make_message_row(content: str = "hello", **overrides) -> dict:
    row = {
        "id": uuid4(),
        "group_id": GROUP_ID,
        "user_id": OWNER_ID,
        "content": content,
        "created_at": CREATED_AT,
    }
    row.update(overrides)
    return row


@pytest.fixture()
def transaction() -> FakeTransaction:
    return FakeTransaction()


@pytest.fixture()
def db(transaction: FakeTransaction) -> MagicMock:
    """A mocked asyncpg connection; tests program the query results they need."""
    connection = MagicMock()
    connection.fetch = AsyncMock(return_value=[])
    connection.fetchrow = AsyncMock(return_value=None)
    connection.fetchval = AsyncMock(return_value=None)
    connection.execute = AsyncMock(return_value="INSERT 0 1")
    connection.transaction = MagicMock(return_value=transaction)
    return connection


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_db_dependency(app: FastAPI, db: MagicMock) -> Iterator[None]:
    async def _acquire_override():
        yield db

    app.dependency_overrides[acquire_db_connection] = _acquire_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(acquire_db_connection, None)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    # No context manager: the lifespan (migrations, pool) must not run.
    return TestClient(app, base_url="http://test", raise_server_exceptions=False)


@pytest.fixture()
def owner_headers() -> dict[str, str]:
    return {"x-user-id": OWNER_ID}

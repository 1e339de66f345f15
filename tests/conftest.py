# tests/conftest.py

from __future__ import annotations

import os

# Settings are read at import time; configure them before the app is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ["OWNER_OPEN_ID"] = "owner-open-id"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("DATABASE_URL", None)

from pathlib import Path

import pytest

from planner.core.database import session_manager
from planner.services.TaskStore import TaskStore

from .helpers import make_client, make_user


@pytest.fixture()
async def database(tmp_path: Path):
    """Session manager bound to a fresh SQLite file for each test."""
    await session_manager.init(f"sqlite+aiosqlite:///{tmp_path / 'planner.sqlite3'}")
    yield session_manager
    await session_manager.close()


@pytest.fixture()
async def store(database):
    """A TaskStore whose writes are committed when the test finishes with it."""
    async with database.get_session() as session:
        yield TaskStore(session)


@pytest.fixture()
async def user(database):
    return await make_user("user-1", name="User 1")


@pytest.fixture()
async def other_user(database):
    return await make_user("user-2", name="User 2")


@pytest.fixture()
async def client(user):
    async with make_client(user.open_id) as c:
        yield c


@pytest.fixture()
async def other_client(other_user):
    async with make_client(other_user.open_id) as c:
        yield c


@pytest.fixture()
async def anon_client(database):
    async with make_client() as c:
        yield c

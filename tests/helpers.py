# tests/helpers.py

from __future__ import annotations

import httpx

from planner.core.config import settings
from planner.core.database import session_manager
from planner.core.security import create_jwt_token
from planner.main import app
from planner.services.TaskStore import TaskStore


async def make_user(open_id: str, name: str = "Test User"):
    async with session_manager.get_session() as session:
        return await TaskStore(session).upsert_user(
            open_id, name=name, email=f"{open_id}@example.com", login_method="oidc"
        )


def make_client(open_id: str | None = None) -> httpx.AsyncClient:
    """ASGI-bound client; carries a session cookie for `open_id` when given."""
    cookies = {}
    if open_id is not None:
        cookies[settings.COOKIE_NAME] = create_jwt_token({"sub": open_id})
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
        cookies=cookies,
    )

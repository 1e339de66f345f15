# tests/test_feedback.py

from __future__ import annotations

import pytest
from sqlalchemy import select

from planner.models.feedback import UserFeedback


@pytest.mark.parametrize("rating", [0, 6])
async def test_out_of_range_rating_is_rejected(client, database, rating) -> None:
    response = await client.post("/api/v1/feedback/submit", json={"rating": rating})

    assert response.status_code == 422
    async with database.get_session() as session:
        assert (await session.execute(select(UserFeedback))).scalars().all() == []


@pytest.mark.parametrize("rating", [1, 5])
async def test_boundary_ratings_are_accepted(client, user, rating) -> None:
    response = await client.post("/api/v1/feedback/submit", json={"rating": rating, "comment": "Great app!"})

    assert response.status_code == 200
    body = response.json()
    assert body["rating"] == rating
    assert body["userId"] == user.id
    assert body["comment"] == "Great app!"


async def test_omitted_comment_is_stored_as_null(client, database) -> None:
    response = await client.post("/api/v1/feedback/submit", json={"rating": 4})
    assert response.status_code == 200

    async with database.get_session() as session:
        row = (await session.execute(select(UserFeedback))).scalar_one()
    assert row.comment is None
    assert row.rating == 4

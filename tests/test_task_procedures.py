# tests/test_task_procedures.py

from __future__ import annotations

import pytest

from planner.core.limiter import limiter
from planner.services.TaskStore import TaskStore

PAY_RENT = {"name": "Pay rent", "dueDate": "2025-12-28", "dueTime": "14:30"}


async def create(client, **overrides):
    body = {**PAY_RENT, **overrides}
    response = await client.post("/api/v1/task/create", json=body)
    assert response.status_code == 200, response.text
    return response.json()


async def list_by_date(client, date="2025-12-28"):
    response = await client.get("/api/v1/task/listByDate", params={"date": date})
    assert response.status_code == 200, response.text
    return response.json()


async def test_pay_rent_scenario(client) -> None:
    created = await create(client)

    tasks = await list_by_date(client)
    assert [t["name"] for t in tasks] == ["Pay rent"]
    assert tasks[0]["completed"] == 0
    assert tasks[0]["id"] == created["id"]

    response = await client.post("/api/v1/task/update", json={"id": created["id"], "completed": 1})
    assert response.status_code == 200
    assert (await list_by_date(client))[0]["completed"] == 1

    response = await client.post("/api/v1/task/delete", json={"id": created["id"]})
    assert response.json() == {"success": True, "deleted": True}
    assert await list_by_date(client) == []
    assert (await client.get("/api/v1/task/listAll")).json() == []


async def test_created_task_appears_in_both_listings(client, user) -> None:
    created = await create(client, description="Transfer to landlord")

    assert created["userId"] == user.id
    assert created["notificationSent"] == 0
    assert created["description"] == "Transfer to landlord"

    all_tasks = (await client.get("/api/v1/task/listAll")).json()
    assert [t["id"] for t in all_tasks] == [created["id"]]
    assert [t["id"] for t in await list_by_date(client)] == [created["id"]]


async def test_listings_keep_insertion_order_and_filter_by_date(client) -> None:
    first = await create(client, name="First", dueTime="18:00")
    second = await create(client, name="Second", dueTime="08:00")
    await create(client, name="Elsewhere", dueDate="2025-12-29")

    assert [t["id"] for t in await list_by_date(client)] == [first["id"], second["id"]]
    assert len((await client.get("/api/v1/task/listAll")).json()) == 3


async def test_empty_description_is_stored_as_null(client) -> None:
    created = await create(client, description="")
    assert created["description"] is None


@pytest.mark.parametrize("name", ["", "   "])
async def test_empty_name_is_rejected_before_write(client, name) -> None:
    response = await client.post("/api/v1/task/create", json={**PAY_RENT, "name": name})

    assert response.status_code == 422
    assert (await client.get("/api/v1/task/listAll")).json() == []


@pytest.mark.parametrize(
    "field,value",
    [
        ("dueDate", "28/12/2025"),
        ("dueDate", "2025-13-01"),
        ("dueDate", "2025-02-31"),
        ("dueDate", "2025-04-31"),
        ("dueTime", "2:30"),
        ("dueTime", "24:00"),
    ],
)
async def test_malformed_date_or_time_is_rejected(client, field, value) -> None:
    response = await client.post("/api/v1/task/create", json={**PAY_RENT, field: value})
    assert response.status_code == 422


async def test_list_by_date_without_tasks_is_empty(client) -> None:
    assert await list_by_date(client, "2030-01-01") == []


async def test_list_by_date_rejects_malformed_date(client) -> None:
    response = await client.get("/api/v1/task/listByDate", params={"date": "tomorrow"})
    assert response.status_code == 422


async def test_list_by_date_rejects_impossible_date(client) -> None:
    response = await client.get("/api/v1/task/listByDate", params={"date": "2025-02-30"})
    assert response.status_code == 422


async def test_leap_day_is_accepted(client) -> None:
    created = await create(client, dueDate="2028-02-29")
    assert [t["id"] for t in await list_by_date(client, "2028-02-29")] == [created["id"]]


async def test_toggle_completed_round_trips(client) -> None:
    created = await create(client)

    for flag in (1, 0):
        response = await client.post("/api/v1/task/update", json={"id": created["id"], "completed": flag})
        assert response.status_code == 200

    task = (await list_by_date(client))[0]
    for key in ("id", "name", "description", "dueDate", "dueTime", "completed", "notificationSent", "createdAt"):
        assert task[key] == created[key]


async def test_update_writes_only_supplied_flags(client) -> None:
    created = await create(client)

    await client.post("/api/v1/task/update", json={"id": created["id"], "completed": 1})
    response = await client.post("/api/v1/task/update", json={"id": created["id"], "notificationSent": 1})

    assert response.json()["completed"] == 1
    assert response.json()["notificationSent"] == 1


async def test_update_rejects_non_flag_values(client) -> None:
    created = await create(client)
    response = await client.post("/api/v1/task/update", json={"id": created["id"], "completed": 2})
    assert response.status_code == 422


async def test_update_missing_task_is_not_found(client) -> None:
    response = await client.post("/api/v1/task/update", json={"id": 999, "completed": 1})
    assert response.status_code == 404


async def test_delete_missing_task_is_a_noop(client) -> None:
    response = await client.post("/api/v1/task/delete", json={"id": 999})

    assert response.status_code == 200
    assert response.json() == {"success": True, "deleted": False}


async def test_other_users_cannot_modify_or_delete(client, other_client) -> None:
    created = await create(client)

    response = await other_client.post("/api/v1/task/update", json={"id": created["id"], "completed": 1})
    assert response.status_code == 403

    response = await other_client.post("/api/v1/task/delete", json={"id": created["id"]})
    assert response.status_code == 403

    task = (await list_by_date(client))[0]
    assert task["completed"] == 0


async def test_tasks_are_private_to_their_owner(client, other_client) -> None:
    await create(client)

    assert await list_by_date(other_client) == []
    assert (await other_client.get("/api/v1/task/listAll")).json() == []


async def test_owner_comes_from_session_not_body(client, user, other_user, database) -> None:
    response = await client.post("/api/v1/task/create", json={**PAY_RENT, "userId": other_user.id})
    assert response.json()["userId"] == user.id

    async with database.get_session() as session:
        assert await TaskStore(session).get_tasks_by_user(other_user.id) == []


@pytest.fixture()
def rate_limited(monkeypatch):
    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield limiter
    limiter.reset()


async def test_mutations_are_rate_limited(client, rate_limited) -> None:
    for _ in range(60):
        response = await client.post("/api/v1/task/delete", json={"id": 999})
        assert response.status_code == 200

    response = await client.post("/api/v1/task/delete", json={"id": 999})
    assert response.status_code == 429

# tests/test_home_state.py

from __future__ import annotations

from datetime import date

import pytest

from planner.ui.client import PlannerClient
from planner.ui.state import DEFAULT_RATING, DEFAULT_TASK_TIME, HomeState

from .fakes import FakeNotifier
from .helpers import make_client

TODAY = date(2025, 12, 28)


@pytest.fixture()
async def home(client) -> HomeState:
    state = HomeState(PlannerClient(client), today=TODAY)
    await state.refresh()
    return state


async def test_initial_state_selects_today(home: HomeState) -> None:
    assert home.selected_date == "2025-12-28"
    assert (home.display_year, home.display_month) == (2025, 12)
    assert home.tasks == []
    assert home.task_time == DEFAULT_TASK_TIME


async def test_create_task_resets_form_and_refetches(home: HomeState) -> None:
    home.open_create_task()
    home.task_name = "Pay rent"
    home.task_time = "14:30"

    assert await home.create_task() is True

    assert home.show_create_task is False
    assert home.task_name == ""
    assert home.task_time == DEFAULT_TASK_TIME
    assert [t["name"] for t in home.tasks] == ["Pay rent"]
    assert home.tasks[0]["description"] is None
    assert [n.level for n in home.pop_notices()] == ["success"]


async def test_blank_name_is_rejected_locally(home: HomeState) -> None:
    home.open_create_task()
    home.task_name = "  "

    assert await home.create_task() is False

    assert home.show_create_task is True
    assert home.pop_notices()[0].message == "Task name is required"
    assert home.tasks == []


async def test_toggle_and_delete_flow(home: HomeState) -> None:
    home.task_name = "Pay rent"
    await home.create_task()
    task = home.tasks[0]

    await home.toggle_task(task["id"], task["completed"])
    assert home.tasks[0]["completed"] == 1
    await home.toggle_task(task["id"], home.tasks[0]["completed"])
    assert home.tasks[0]["completed"] == 0

    home.request_delete(task["id"])
    assert await home.confirm_delete() is True
    assert home.task_to_delete is None
    assert home.tasks == []


async def test_select_date_refetches_that_day(home: HomeState) -> None:
    home.task_name = "Tomorrow's task"
    await home.select_date("2025-12-29")
    await home.create_task()

    await home.select_date("2025-12-28")
    assert home.tasks == []
    await home.select_date("2025-12-29")
    assert [t["dueDate"] for t in home.tasks] == ["2025-12-29"]


async def test_month_navigation_keeps_selection(home: HomeState) -> None:
    home.next_month()
    assert (home.display_year, home.display_month) == (2026, 1)
    assert not any(c.is_selected for c in home.month_grid().days)

    home.previous_month()
    grid = home.month_grid()
    assert [c.day for c in grid.days if c.is_selected] == [28]
    assert [c.day for c in grid.days if c.is_today] == [28]


async def test_feedback_submission_resets_form(home: HomeState) -> None:
    home.open_feedback()
    home.feedback_rating = 3
    home.feedback_comment = "Nice"

    assert await home.submit_feedback() is True

    assert home.show_feedback is False
    assert home.feedback_rating == DEFAULT_RATING
    assert home.feedback_comment == ""


async def test_failed_feedback_keeps_input(home: HomeState) -> None:
    home.open_feedback()
    home.feedback_rating = 9
    home.feedback_comment = "Too many stars"

    assert await home.submit_feedback() is False

    assert home.show_feedback is True
    assert home.feedback_comment == "Too many stars"
    assert home.pop_notices()[0].level == "error"


async def test_errors_become_notices_without_retry(database) -> None:
    async with make_client() as anon:
        state = HomeState(PlannerClient(anon), today=TODAY)
        state.open_create_task()
        state.task_name = "Pay rent"

        assert await state.create_task() is False

    notices = state.pop_notices()
    assert [n.message for n in notices] == ["Not authenticated"]
    assert state.task_name == "Pay rent"
    assert state.show_create_task is True


async def test_successful_create_asks_for_reminder_permission(client) -> None:
    notifier = FakeNotifier()
    state = HomeState(PlannerClient(client), today=TODAY, notifier=notifier)

    state.task_name = "Pay rent"
    assert await state.create_task() is True
    assert notifier.permission_requests == 1

    state.task_name = "   "
    assert await state.create_task() is False
    assert notifier.permission_requests == 1


async def test_failed_create_does_not_ask_for_permission(database) -> None:
    notifier = FakeNotifier()
    async with make_client() as anon:
        state = HomeState(PlannerClient(anon), today=TODAY, notifier=notifier)
        state.task_name = "Pay rent"
        assert await state.create_task() is False

    assert notifier.permission_requests == 0

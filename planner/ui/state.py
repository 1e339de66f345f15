"""State of the planner's single page: calendar, day list, dialogs and forms."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from planner.constants.constants import DATE_FORMAT
from planner.ui.calendar import MonthGrid, build_month_grid, shift_month
from planner.ui.client import PlannerClient, ProcedureError
from planner.ui.notifier import Notifier

logger = logging.getLogger(__name__)

DEFAULT_TASK_TIME = "09:00"
DEFAULT_RATING = 5


@dataclass
class Notice:
    """Transient message shown to the user."""
    level: str  # "success" | "error"
    message: str


class HomeState:
    """
    Everything the page holds between events.

    Every mutation goes through the client and is followed by a re-fetch of
    the selected day. Failures become error notices and leave form input in
    place; nothing is retried.
    """

    def __init__(self, client: PlannerClient, today: Optional[date] = None, notifier: Optional[Notifier] = None):
        self.client = client
        self.notifier = notifier
        today = today or date.today()
        self.today = today
        self.selected_date: str = today.strftime(DATE_FORMAT)
        self.display_year: int = today.year
        self.display_month: int = today.month

        self.show_create_task = False
        self.show_feedback = False
        self.task_to_delete: Optional[int] = None

        self.task_name = ""
        self.task_description = ""
        self.task_time = DEFAULT_TASK_TIME
        self.feedback_rating = DEFAULT_RATING
        self.feedback_comment = ""

        self.tasks: List[Dict[str, Any]] = []
        self.notices: List[Notice] = []

    # ------------------------------
    # Notices
    # ------------------------------
    def _notify(self, level: str, message: str):
        self.notices.append(Notice(level, message))

    def pop_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    # ------------------------------
    # Calendar
    # ------------------------------
    def month_grid(self) -> MonthGrid:
        return build_month_grid(
            self.display_year, self.display_month, today=self.today, selected=self.selected_date
        )

    def previous_month(self):
        self.display_year, self.display_month = shift_month(self.display_year, self.display_month, -1)

    def next_month(self):
        self.display_year, self.display_month = shift_month(self.display_year, self.display_month, 1)

    async def select_date(self, date_str: str):
        self.selected_date = date_str
        await self.refresh()

    async def refresh(self):
        try:
            self.tasks = await self.client.list_by_date(self.selected_date)
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to load tasks")

    # ------------------------------
    # Dialogs
    # ------------------------------
    def open_create_task(self):
        self.show_create_task = True

    def close_create_task(self):
        self.show_create_task = False

    def open_feedback(self):
        self.show_feedback = True

    def close_feedback(self):
        self.show_feedback = False

    def request_delete(self, task_id: int):
        self.task_to_delete = task_id

    def cancel_delete(self):
        self.task_to_delete = None

    # ------------------------------
    # Mutations
    # ------------------------------
    async def create_task(self) -> bool:
        if not self.task_name.strip():
            self._notify("error", "Task name is required")
            return False

        try:
            await self.client.create_task(
                name=self.task_name,
                description=self.task_description,
                due_date=self.selected_date,
                due_time=self.task_time,
            )
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to create task")
            return False

        self._notify("success", "Task created successfully!")
        self.task_name = ""
        self.task_description = ""
        self.task_time = DEFAULT_TASK_TIME
        self.show_create_task = False
        await self.refresh()
        if self.notifier is not None:
            self.notifier.request_permission()
        return True

    async def toggle_task(self, task_id: int, completed: int) -> bool:
        try:
            await self.client.update_task(task_id, completed=0 if completed == 1 else 1)
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to update task")
            return False
        await self.refresh()
        return True

    async def mark_notified(self, task_id: int) -> bool:
        try:
            await self.client.update_task(task_id, notification_sent=1)
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to update task")
            return False
        await self.refresh()
        return True

    async def confirm_delete(self) -> bool:
        if self.task_to_delete is None:
            return False
        try:
            await self.client.delete_task(self.task_to_delete)
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to delete task")
            return False

        self._notify("success", "Task deleted")
        self.task_to_delete = None
        await self.refresh()
        return True

    async def submit_feedback(self) -> bool:
        try:
            await self.client.submit_feedback(self.feedback_rating, self.feedback_comment)
        except ProcedureError as e:
            self._notify("error", e.message or "Failed to submit feedback")
            return False

        self._notify("success", "Thank you for your feedback!")
        self.feedback_rating = DEFAULT_RATING
        self.feedback_comment = ""
        self.show_feedback = False
        return True

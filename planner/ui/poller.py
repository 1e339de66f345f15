"""Minute-resolution reminder loop over the tasks the page has loaded."""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Protocol

from planner.constants.constants import TASK_REMINDER_TITLE, TIME_FORMAT
from planner.ui.notifier import LogNotifier, Notifier
from planner.ui.state import HomeState

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


class NotificationPoller:
    """
    Fires one reminder per loaded task whose due time equals the current
    HH:MM and that has not been notified yet, then flags it through
    task.update. A tick that never runs during a task's minute never fires
    for it.
    """

    def __init__(self, state: HomeState, clock: Optional[Clock] = None, notifier: Optional[Notifier] = None, interval: float = 60):
        self.state = state
        self.clock = clock or SystemClock()
        self.notifier = notifier or state.notifier or LogNotifier()
        self.interval = interval
        self._stopped = asyncio.Event()

    async def tick(self) -> List[int]:
        """Run one check; returns the ids of the tasks that were notified."""
        if not self.notifier.permission_granted():
            return []

        current_time = self.clock.now().strftime(TIME_FORMAT)
        due = [
            task for task in list(self.state.tasks)
            if task["dueTime"] == current_time and not task["notificationSent"]
        ]

        notified = []
        for task in due:
            self.notifier.notify(TASK_REMINDER_TITLE, f"Time for: {task['name']}")
            if await self.state.mark_notified(task["id"]):
                notified.append(task["id"])
        return notified

    async def run(self):
        self._stopped.clear()
        while not self._stopped.is_set():
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                await self.tick()

    def stop(self):
        self._stopped.set()

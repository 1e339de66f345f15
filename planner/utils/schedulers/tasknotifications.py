"""Task reminder sweep for the Daily Planner."""

import asyncio
from datetime import datetime
from typing import Optional
import pytz
import logging

from planner.constants.constants import DATE_FORMAT, TASK_REMINDER_TITLE, TIME_FORMAT
from planner.core.config import settings
from planner.core.database import StoreUnavailableError, session_manager
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)


async def run_notification_sweep(store: TaskStore, now: datetime) -> int:
    """
    Turn every task due at `now` (minute resolution) into an in-app reminder.

    Tasks already notified or completed are skipped by the store query, so a
    task is reminded at most once. Returns the number of reminders written.
    """
    due_date = now.strftime(DATE_FORMAT)
    due_time = now.strftime(TIME_FORMAT)
    tasks = await store.get_tasks_for_notification(due_date, due_time)

    for task in tasks:
        await store.create_notification(
            user_id=task.user_id,
            task_id=task.id,
            title=TASK_REMINDER_TITLE,
            message=f"Time for: {task.name}",
        )
        await store.update_task(task.id, notification_sent=1)

    if tasks:
        logger.info(f"🔔 {len(tasks)} reminder(s) sent for {due_date} {due_time}")
    return len(tasks)


async def task_notification_scheduler(interval: Optional[int] = None):
    """
    Background task that checks every `interval` seconds for tasks due this minute.
    Missed minutes are not caught up.
    """
    interval = interval or settings.NOTIFICATION_SWEEP_SECONDS
    timezone = pytz.timezone(settings.NOTIFICATION_TIMEZONE)
    logger.info(f"📅 Task notification scheduler started ({interval}s, {timezone})")

    while True:
        try:
            now = datetime.now(timezone)
            async with session_manager.get_session() as session:
                await run_notification_sweep(TaskStore(session), now)
        except StoreUnavailableError:
            logger.warning("Task notification sweep skipped: database not available")
        except Exception as e:
            logger.exception(f"❌ Task notification sweep failed: {e}")

        await asyncio.sleep(interval)

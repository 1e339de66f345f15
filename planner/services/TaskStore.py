"""Persistence client for users, tasks, feedback and in-app notifications."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from planner.constants.constants import UserRole
from planner.models.feedback import UserFeedback
from planner.models.notifications import Notification
from planner.models.task import Task
from planner.models.user import User

logger = logging.getLogger(__name__)

_UNSET = object()


class TaskStore:
    """
    Store bound to a single AsyncSession.

    Every method issues its statements on the session it was built with;
    committing is left to the session owner (see DatabaseSessionManager).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------
    # Users
    # ------------------------------
    async def upsert_user(
        self,
        open_id: str,
        name=_UNSET,
        email=_UNSET,
        login_method=_UNSET,
        role: Optional[UserRole] = None,
        last_signed_in: Optional[datetime] = None,
    ) -> User:
        """
        Insert or update a user keyed on the identity provider subject id.

        Only the fields explicitly passed are written on an existing row;
        role is left alone unless supplied. last_signed_in defaults to now.
        """
        if not open_id:
            raise ValueError("User openId is required for upsert")

        supplied = {
            field: value
            for field, value in (("name", name), ("email", email), ("login_method", login_method))
            if value is not _UNSET
        }
        if role is not None:
            supplied["role"] = role
        supplied["last_signed_in"] = last_signed_in or datetime.utcnow()

        user = await self.get_user_by_open_id(open_id)
        if user is None:
            user = User(open_id=open_id, **supplied)
            self.session.add(user)
        else:
            for field, value in supplied.items():
                setattr(user, field, value)

        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_user_by_open_id(self, open_id: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.open_id == open_id).limit(1)
        )
        return result.scalar_one_or_none()

    # ------------------------------
    # Tasks
    # ------------------------------
    async def create_task(
        self,
        user_id: int,
        name: str,
        due_date: str,
        due_time: str,
        description: Optional[str] = None,
    ) -> Task:
        task = Task(
            user_id=user_id,
            name=name,
            description=description,
            due_date=due_date,
            due_time=due_time,
            completed=0,
            notification_sent=0,
        )
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def get_task(self, task_id: int) -> Optional[Task]:
        result = await self.session.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def get_tasks_by_user_and_date(self, user_id: int, date: str) -> List[Task]:
        result = await self.session.execute(
            select(Task)
            .where(and_(Task.user_id == user_id, Task.due_date == date))
            .order_by(Task.id)
        )
        return list(result.scalars().all())

    async def get_tasks_by_user(self, user_id: int) -> List[Task]:
        result = await self.session.execute(
            select(Task).where(Task.user_id == user_id).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def update_task(self, task_id: int, **updates) -> Optional[Task]:
        """Apply only the supplied column updates. Returns None if the row is gone."""
        task = await self.get_task(task_id)
        if task is None:
            return None
        for field, value in updates.items():
            setattr(task, field, value)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete_task(self, task_id: int) -> bool:
        task = await self.get_task(task_id)
        if task is None:
            return False
        await self.session.delete(task)
        await self.session.flush()
        return True

    async def get_tasks_for_notification(self, date: str, time: str) -> List[Task]:
        """Tasks due exactly at (date, time) that are neither completed nor notified."""
        result = await self.session.execute(
            select(Task)
            .where(
                and_(
                    Task.due_date == date,
                    Task.due_time == time,
                    Task.notification_sent == 0,
                    Task.completed == 0,
                )
            )
            .order_by(Task.id)
        )
        return list(result.scalars().all())

    # ------------------------------
    # Feedback
    # ------------------------------
    async def submit_feedback(
        self, user_id: int, rating: int, comment: Optional[str] = None
    ) -> UserFeedback:
        feedback = UserFeedback(user_id=user_id, rating=rating, comment=comment)
        self.session.add(feedback)
        await self.session.flush()
        await self.session.refresh(feedback)
        return feedback

    # ------------------------------
    # Notifications
    # ------------------------------
    async def create_notification(
        self, user_id: int, title: str, message: str, task_id: Optional[int] = None
    ) -> Notification:
        notification = Notification(
            user_id=user_id, task_id=task_id, title=title, message=message, is_read=False
        )
        self.session.add(notification)
        await self.session.flush()
        return notification

    async def list_notifications(
        self, user_id: int, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.is_read == False)  # noqa: E712
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_unread_notifications(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Notification.id)).where(
                and_(
                    Notification.user_id == user_id,
                    Notification.is_read == False,  # noqa: E712
                )
            )
        )
        return result.scalar() or 0

    async def mark_notification_read(self, user_id: int, notification_id: int) -> Optional[Notification]:
        result = await self.session.execute(
            select(Notification).where(
                and_(
                    Notification.id == notification_id,
                    Notification.user_id == user_id,
                )
            )
        )
        notification = result.scalar_one_or_none()
        if notification is None:
            return None
        notification.is_read = True
        notification.read_at = datetime.utcnow()
        await self.session.flush()
        return notification

"""Task model for the users of the Daily Planner."""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from planner.models.base import Base, TimestampMixin


class Task(Base, TimestampMixin):
    """Model representing a dated, timed task owned by one user."""

    __tablename__ = "tasks"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column("userId", Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column("dueDate", String(10), nullable=False)  # YYYY-MM-DD
    due_time = Column("dueTime", String(8), nullable=False)  # HH:MM (24-hour)
    completed = Column(Integer, default=0, nullable=False)
    notification_sent = Column("notificationSent", Integer, default=0, nullable=False)

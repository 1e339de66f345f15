from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from planner.models.base import Base, TimestampMixin


class Notification(Base, TimestampMixin):
    """Model for in-app task reminders."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column("userId", Integer, ForeignKey("users.id"), nullable=False, index=True)
    task_id = Column("taskId", Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)

    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)

    is_read = Column("isRead", Boolean, default=False)
    read_at = Column("readAt", DateTime, nullable=True)

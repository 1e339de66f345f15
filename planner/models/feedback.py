from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from planner.models.base import Base


class UserFeedback(Base):
    """Star rating left by a user; written once, never read back by the app."""

    __tablename__ = "user_feedback"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column("userId", Integer, ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(Text, nullable=True)
    created_at = Column("createdAt", DateTime, default=datetime.utcnow, nullable=False)

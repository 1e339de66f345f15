"""User model for the Daily Planner, keyed by the identity provider subject id."""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, Enum

from planner.constants.constants import UserRole
from planner.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    open_id = Column("openId", String(64), unique=True, index=True, nullable=False)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    login_method = Column("loginMethod", String(64), nullable=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.user)
    last_signed_in = Column("lastSignedIn", DateTime, default=datetime.utcnow, nullable=False)

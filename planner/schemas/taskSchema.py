from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from planner.constants.constants import DATE_FORMAT, DATE_PATTERN, TIME_PATTERN


class CamelModel(BaseModel):
    """Base schema exchanging camelCase field names with the client."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def check_calendar_date(value: str) -> str:
    """Reject dates that match YYYY-MM-DD but do not exist, such as 2025-02-31."""
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise ValueError("Invalid date")
    return value


class TaskResponse(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str]
    due_date: str
    due_time: str
    completed: int
    notification_sent: int
    created_at: datetime
    updated_at: datetime


class TaskCreateRequest(CamelModel):
    """Request schema for creating a new task."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: str = Field(..., pattern=DATE_PATTERN)
    due_time: str = Field(..., pattern=TIME_PATTERN)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Task name is required")
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_exists(cls, value: str) -> str:
        return check_calendar_date(value)

    @field_validator("description")
    @classmethod
    def description_blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class TaskUpdateRequest(CamelModel):
    """Request schema for toggling task flags. Omitted flags are left untouched."""
    id: int
    completed: Optional[Literal[0, 1]] = None
    notification_sent: Optional[Literal[0, 1]] = None


class TaskDeleteRequest(CamelModel):
    id: int


class TaskDeleteResponse(CamelModel):
    success: bool = True
    deleted: bool

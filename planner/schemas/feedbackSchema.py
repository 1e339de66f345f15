from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from planner.constants.constants import MAX_RATING, MIN_RATING
from planner.schemas.taskSchema import CamelModel


class FeedbackSubmitRequest(CamelModel):
    """Request schema for a star rating with an optional comment."""
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def comment_blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value


class FeedbackResponse(CamelModel):
    id: int
    user_id: int
    rating: int
    comment: Optional[str]
    created_at: datetime

import logging
from fastapi import APIRouter, Depends, Request

from planner.core.config import settings
from planner.core.database import aget_store
from planner.core.limiter import limiter
from planner.core.security import get_current_user
from planner.models.user import User
from planner.schemas.feedbackSchema import FeedbackResponse, FeedbackSubmitRequest
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("/submit", response_model=FeedbackResponse)
@limiter.limit(settings.RATE_LIMIT)
async def submit_feedback(
    request: Request,
    feedback_data: FeedbackSubmitRequest,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """Record a 1-5 star rating from the caller."""
    feedback = await store.submit_feedback(
        user_id=current_user.id,
        rating=feedback_data.rating,
        comment=feedback_data.comment,
    )
    logger.info(f"Feedback {feedback.id} ({feedback.rating} stars) from user {current_user.id}")
    return feedback

from fastapi import APIRouter, Depends, HTTPException

from planner.core.database import aget_store
from planner.core.security import get_current_user
from planner.models.user import User
from planner.schemas.notificationSchema import (
    NotificationListResponse,
    NotificationReadRequest,
    NotificationResponse,
)
from planner.services.TaskStore import TaskStore

router = APIRouter(prefix="/notification", tags=["notification"])


@router.get("/list", response_model=NotificationListResponse)
async def get_notifications(
    unread_only: bool = False,
    limit: int = 50,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """Get task reminders for the current user."""
    notifications = await store.list_notifications(current_user.id, unread_only=unread_only, limit=limit)
    unread_count = await store.count_unread_notifications(current_user.id)

    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=unread_count,
    )


@router.post("/markRead", response_model=NotificationResponse)
async def mark_notification_as_read(
    request_data: NotificationReadRequest,
    current_user: User = Depends(get_current_user),
    store: TaskStore = Depends(aget_store)
):
    """Mark a notification as read."""
    notification = await store.mark_notification_read(current_user.id, request_data.id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification

from datetime import datetime
from typing import List, Optional

from planner.schemas.taskSchema import CamelModel


class NotificationResponse(CamelModel):
    id: int
    task_id: Optional[int]
    title: str
    message: str
    is_read: bool
    read_at: Optional[datetime]
    created_at: datetime


class NotificationListResponse(CamelModel):
    notifications: List[NotificationResponse]
    unread_count: int


class NotificationReadRequest(CamelModel):
    id: int

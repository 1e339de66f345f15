from datetime import datetime
from typing import Optional

from planner.constants.constants import UserRole
from planner.schemas.taskSchema import CamelModel


class UserResponse(CamelModel):
    id: int
    open_id: str
    name: Optional[str]
    email: Optional[str]
    login_method: Optional[str]
    role: UserRole
    created_at: datetime
    updated_at: datetime
    last_signed_in: datetime


class LogoutResponse(CamelModel):
    success: bool = True

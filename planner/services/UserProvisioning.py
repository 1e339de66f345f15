"""Provisioning of users signing in through the identity provider."""

import logging
from typing import Optional

from planner.constants.constants import UserRole
from planner.core.config import settings
from planner.models.user import User
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)


def bootstrap_role(open_id: str, owner_open_id: Optional[str] = None) -> Optional[UserRole]:
    """Role granted at provisioning time: admin for the configured owner, otherwise none."""
    owner_open_id = owner_open_id if owner_open_id is not None else settings.OWNER_OPEN_ID
    if owner_open_id and open_id == owner_open_id:
        return UserRole.admin
    return None


async def provision_user(
    store: TaskStore,
    open_id: str,
    name: Optional[str],
    email: Optional[str],
    login_method: Optional[str],
    owner_open_id: Optional[str] = None,
) -> User:
    """
    Create or refresh the user row for a successful login.

    Profile fields from the provider are always written; the role is only
    written when the bootstrap step grants one, so roles changed by an
    admin survive later logins.
    """
    role = bootstrap_role(open_id, owner_open_id)
    user = await store.upsert_user(
        open_id,
        name=name,
        email=email,
        login_method=login_method,
        role=role,
    )
    if role is not None:
        logger.info(f"Owner account {open_id} provisioned as {role.value}")
    return user

"""Security utilities for handling the JWT session cookie and resolving the caller."""

import logging
from typing import Optional
from datetime import datetime, timedelta
import jwt
from fastapi import Depends, HTTPException, Request, Response, status

from planner.core.config import settings
from planner.core.database import aget_store, session_manager
from planner.models.user import User
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)


def create_jwt_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a JWT (JSON Web Token) with the provided data and expiration time.

    Args:
        data (dict): The payload data to be encoded in the JWT.
        expires_delta (timedelta, optional): The time until the token expires.
            Defaults to ACCESS_TOKEN_EXPIRE_HOURS.

    Returns:
        str: The encoded JWT string.

    Note:
        The token includes standard JWT claims:
        - exp (expiration time)
        - iat (issued at time)
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_jwt_token(token: str) -> dict:
    """Decodes and validates a JWT token.

    Args:
        token (str): The JWT token string to decode.

    Returns:
        dict: The decoded token payload containing the claims.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or improperly formatted.
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM]
    )


# -----------------------------
# Cookie Helpers
# -----------------------------
def get_session_cookie_options(request: Request) -> dict:
    """Cookie options derived from the request: secure only over HTTPS."""
    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    secure = request.url.scheme == "https" or "https" in forwarded_proto.split(",")[0].lower()
    return {
        "httponly": True,
        "secure": secure,
        "samesite": "none" if secure else "lax",
        "domain": settings.COOKIE_DOMAIN,
        "path": "/",
    }


def set_auth_cookie(request: Request, response: Response, token: str, expires: timedelta):
    """Set the session cookie."""
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=int(expires.total_seconds()),
        **get_session_cookie_options(request)
    )


def clear_auth_cookie(request: Request, response: Response):
    """Expire the session cookie immediately."""
    response.delete_cookie(key=settings.COOKIE_NAME, **get_session_cookie_options(request))


# -----------------------------
# Caller resolution
# -----------------------------
def get_token_subject(request: Request) -> str:
    """
    Dependency that reads the session cookie and returns its subject.
    Never touches the store; raises 401 if not authenticated.
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    try:
        payload = decode_jwt_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token"
        )

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token"
        )
    return subject


async def get_current_user(
    open_id: str = Depends(get_token_subject),
    store: TaskStore = Depends(aget_store)
) -> User:
    """
    Dependency to get current authenticated user from the session cookie.
    Raises 401 if not authenticated
    """
    user = await store.get_user_by_open_id(open_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


async def get_optional_user(request: Request) -> Optional[User]:
    """Resolve the caller for public procedures; None when there is no valid session."""
    try:
        open_id = get_token_subject(request)
    except HTTPException:
        return None

    async with session_manager.get_session() as session:
        return await TaskStore(session).get_user_by_open_id(open_id)

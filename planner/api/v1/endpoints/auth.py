from typing import Optional
from datetime import timedelta
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from authlib.integrations.starlette_client import OAuth, OAuthError
import logging

from planner.core.config import settings
from planner.core.database import session_manager
from planner.core.security import (
    clear_auth_cookie,
    create_jwt_token,
    get_optional_user,
    set_auth_cookie,
)
from planner.models.user import User
from planner.schemas.userSchema import LogoutResponse, UserResponse
from planner.services.TaskStore import TaskStore
from planner.services.UserProvisioning import provision_user

logger = logging.getLogger(__name__)

FRONTEND_URL = settings.FRONTEND_URL

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

# -----------------------------
# OAuth Setup
# -----------------------------
oauth = OAuth()
oauth.register(
    name="identity",
    client_id=settings.OAUTH_CLIENT_ID,
    client_secret=settings.OAUTH_CLIENT_SECRET,
    server_metadata_url=settings.OAUTH_SERVER_METADATA_URL,
    client_kwargs={"scope": settings.OAUTH_SCOPE}
)


# -----------------------------
# Login
# -----------------------------
@router.get("/login")
async def login(request: Request, returnUrl: Optional[str] = None):
    """
    Initiate the OAuth login redirect
    """
    try:
        if returnUrl:
            request.session["return_url"] = returnUrl

        redirect_uri = request.url_for("oauth_callback")
        return await oauth.identity.authorize_redirect(request, str(redirect_uri))
    except Exception as e:
        logger.error(f"OAuth login error: {e}")
        return RedirectResponse(url=f"{FRONTEND_URL}/login?error=connection_failed")


@router.get("/callback", name="oauth_callback")
async def oauth_callback(request: Request):
    """
    Handle the OAuth callback: provision the user and issue the session cookie
    """
    try:
        token = await oauth.identity.authorize_access_token(request)
    except OAuthError as e:
        logger.warning(f"OAuth callback rejected: {e.error}")
        return RedirectResponse(url=f"{FRONTEND_URL}/login?error=auth_failed")

    user_info = token.get("userinfo") or {}
    open_id = user_info.get("sub")
    if not open_id:
        logger.warning("OAuth callback without a subject id")
        return RedirectResponse(url=f"{FRONTEND_URL}/login?error=auth_failed")

    async with session_manager.get_session() as session:
        user = await provision_user(
            TaskStore(session),
            open_id=open_id,
            name=user_info.get("name"),
            email=user_info.get("email"),
            login_method=settings.OAUTH_PROVIDER_NAME,
        )

    return_url = request.session.pop("return_url", "/")
    expires = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    jwt_token = create_jwt_token(
        {"sub": user.open_id, "role": user.role.value, "method": user.login_method},
        expires_delta=expires,
    )

    response = RedirectResponse(url=f"{FRONTEND_URL}/{return_url.lstrip('/')}", status_code=303)
    set_auth_cookie(request, response, jwt_token, expires)
    return response


# -----------------------------
# Get Current User
# -----------------------------
@router.get("/me", response_model=Optional[UserResponse])
async def me(user: Optional[User] = Depends(get_optional_user)):
    """
    Return current authenticated user info, or null
    """
    return user


# -----------------------------
# Logout
# -----------------------------
@router.post("/logout", response_model=LogoutResponse)
async def logout(request: Request):
    response = JSONResponse({"success": True})
    clear_auth_cookie(request, response)
    return response

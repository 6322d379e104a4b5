"""
Console Authentication Endpoints.

Sign in, sign out and "who am I" for the admin console. The session lives in
an HttpOnly cookie; see :mod:`campaign_portal.server.services.auth`.
"""

from fastapi import APIRouter, HTTPException, Response, status

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.auth import LoginRequest, UserRead
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.auth import (
    authenticate,
    clear_session_cookie,
    create_session_token,
    set_session_cookie,
)
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import CurrentUser, SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "/login",
    summary="Sign In",
    description="Check email and password and set the session cookie.",
    response_description="The signed-in user.",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(credentials: LoginRequest, response: Response, session: SessionDep):
    """
    Sign in to the console.

    - **email**: Account email (case-insensitive)
    - **password**: Account password

    Inactive accounts cannot sign in.
    """
    user = await authenticate(session, credentials.email, credentials.password)
    if user is None:
        logger.info(f"Failed login attempt for {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    user.last_login_at = utc_now()
    session.add(user)
    await session.commit()
    await session.refresh(user)

    set_session_cookie(response, create_session_token(user))
    logger.info(f"User {user.id} signed in")
    return ok(UserRead.model_validate(user), message="Signed in")


@router.post(
    "/logout",
    summary="Sign Out",
    description="Clear the session cookie.",
    response_description="Confirmation message.",
)
async def logout(response: Response):
    """Sign out. Safe to call without a session."""
    clear_session_cookie(response)
    return ok(None, message="Signed out")


@router.get(
    "/me",
    summary="Current User",
    description="Return the user the session cookie belongs to.",
    response_description="The signed-in user.",
    responses={401: {"description": "Authentication required"}},
)
async def me(user: CurrentUser):
    return ok(UserRead.model_validate(user))

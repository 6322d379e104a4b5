"""
Console authentication.

Staff sign in with email and password; the server answers with an HttpOnly
cookie holding a signed JWT (``sub``, ``role``, ``ver``, ``exp``). Each request
re-reads the user row, so deactivating a user, changing their role or bumping
``session_version`` takes effect immediately.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated, Optional

import jwt
from fastapi import Depends, HTTPException, Request, Response, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from campaign_portal.core.database import get_session
from campaign_portal.core.database.entities.users import User
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import UserRole
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core.config import settings

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def create_session_token(user: User, ttl_minutes: Optional[int] = None) -> str:
    """Sign a session token for ``user``."""
    config = settings.session
    expires = utc_now() + timedelta(minutes=ttl_minutes or config.ttl_minutes)
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "ver": user.session_version,
        "exp": expires,
    }
    return jwt.encode(payload, config.secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str) -> dict:
    """
    Verify signature and expiry.

    Raises:
        jwt.InvalidTokenError: tampered, malformed or expired token
    """
    return jwt.decode(token, settings.session.secret, algorithms=[JWT_ALGORITHM])


def set_session_cookie(response: Response, token: str) -> None:
    config = settings.session
    response.set_cookie(
        key=config.cookie_name,
        value=token,
        max_age=config.ttl_minutes * 60,
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session.cookie_name, path="/")


async def authenticate(session: AsyncSession, email: str, password: str) -> Optional[User]:
    """Return the active user matching the credentials, else None."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    user = result.scalars().first()
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        return None
    return user


_UNAUTHENTICATED = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")


async def get_current_user(request: Request, session: AsyncSession = Depends(get_session)) -> User:
    """
    Resolve the signed-in user from the session cookie.

    Raises:
        HTTPException: 401 when the cookie is missing, invalid, expired or revoked
    """
    token = request.cookies.get(settings.session.cookie_name)
    if not token:
        raise _UNAUTHENTICATED
    try:
        claims = decode_session_token(token)
        user_id = int(claims["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.debug(f"Rejected session token: {e}")
        raise _UNAUTHENTICATED

    user = await session.get(User, user_id)
    if user is None or not user.is_active or claims.get("ver") != user.session_version:
        raise _UNAUTHENTICATED
    return user


async def get_optional_user(request: Request, session: AsyncSession = Depends(get_session)) -> Optional[User]:
    """Like :func:`get_current_user` but returns None instead of raising."""
    try:
        return await get_current_user(request, session)
    except HTTPException:
        return None


def require_roles(*roles: UserRole):
    """Dependency factory: 403 unless the current user has one of ``roles``."""

    async def _checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return _checker


require_staff = require_roles(UserRole.admin, UserRole.moderator)
require_admin = require_roles(UserRole.admin)

CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
StaffUser = Annotated[User, Depends(require_staff)]
AdminUser = Annotated[User, Depends(require_admin)]

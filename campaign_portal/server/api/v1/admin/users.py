"""
Console User Management (admins only).

Creating users, changing roles, deactivating accounts and revoking
sessions. Every session cookie carries the user's ``session_version``, so
bumping it signs the user out everywhere.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import User
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import UserRole
from campaign_portal.core.models.io.auth import UserCreate, UserRead, UserUpdate
from campaign_portal.server.services.auth import hash_password
from campaign_portal.server.services.content import bad_request, changes, get_or_404, ok, paged
from campaign_portal.server.services.deps import AdminUser, PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.get("", summary="List Users")
async def list_users(
    session: SessionDep,
    page: PageDep,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
):
    stmt = select(User)
    if role is not None:
        stmt = stmt.where(User.role == role)
    if is_active is not None:
        stmt = stmt.where(User.is_active == is_active)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(User.email.ilike(pattern), User.full_name.ilike(pattern)))
    stmt = stmt.order_by(User.created_at.desc(), User.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([UserRead.model_validate(u) for u in rows], total, page)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    responses={400: {"description": "Email already registered"}},
)
async def create_user(user_in: UserCreate, session: SessionDep, admin: AdminUser):
    email = user_in.email.lower()
    if await AsyncRepository(session, User).exists(email=email):
        raise bad_request("Email already registered")
    user = User(
        email=email,
        full_name=user_in.full_name,
        password_hash=hash_password(user_in.password),
        role=user_in.role,
        is_active=user_in.is_active,
    )
    user = await AsyncRepository(session, User).create(user)
    logger.info(f"User {user.id} ({user.role.value}) created by admin {admin.id}")
    return ok(UserRead.model_validate(user), message="User created")


@router.patch("/{user_id}", summary="Update User", description="Change name, role, active flag or password.")
async def update_user(user_id: int, user_in: UserUpdate, session: SessionDep, admin: AdminUser):
    user = await get_or_404(session, User, user_id, "User")
    data = changes(user_in, "role", "is_active", "password")
    if user.id == admin.id and (data.get("is_active") is False or data.get("role", UserRole.admin) != UserRole.admin):
        raise bad_request("You cannot demote or deactivate your own account")

    password = data.pop("password", None)
    if password is not None:
        data["password_hash"] = hash_password(password)
    if password is not None or data.get("is_active") is False:
        data["session_version"] = user.session_version + 1
    user = await AsyncRepository(session, User).update(user, data)
    return ok(UserRead.model_validate(user), message="User updated")


@router.post("/{user_id}/logout", summary="Force Logout", description="Invalidate every session of the user.")
async def force_logout(user_id: int, session: SessionDep, admin: AdminUser):
    user = await get_or_404(session, User, user_id, "User")
    user = await AsyncRepository(session, User).update(user, {"session_version": user.session_version + 1})
    logger.info(f"Sessions of user {user.id} revoked by admin {admin.id}")
    return ok(UserRead.model_validate(user), message="User signed out everywhere")

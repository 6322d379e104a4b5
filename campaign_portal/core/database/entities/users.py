"""
User entity.

Console access is decided by the ``role`` column; ``session_version`` is
embedded in every session token so bumping it revokes outstanding sessions.
"""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import UserRole

from ..base import TimestampedBase


class User(TimestampedBase, table=True):
    """Registered account (visitor or console staff).

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    email: str = Field(unique=True, index=True, description="Login email, stored lowercase")
    full_name: Optional[str] = Field(default=None)
    password_hash: str = Field(description="passlib hash of the password")
    role: UserRole = Field(default=UserRole.user)
    is_active: bool = Field(default=True)
    session_version: int = Field(default=1, description="Incremented to revoke all sessions")
    last_login_at: Optional[NaiveDatetime] = Field(default=None)

    @property
    def is_staff(self) -> bool:
        return self.role in (UserRole.admin, UserRole.moderator)

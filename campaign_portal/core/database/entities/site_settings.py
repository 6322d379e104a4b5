"""Key/value site settings edited from the console."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import TimestampedBase


class SiteSetting(TimestampedBase, table=True):
    """Table: site_settings"""

    __tablename__ = "site_settings"
    __table_args__ = ({"extend_existing": True},)

    key: str = Field(unique=True, index=True)
    value: Any = Field(default=None, sa_type=JSON)
    category: str = Field(default="general", index=True)
    description: Optional[str] = None
    is_public: bool = Field(default=True)

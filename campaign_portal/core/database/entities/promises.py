"""Manifesto promises, their categories and progress updates."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON, Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import PromiseStatus
from campaign_portal.core.utils import utc_now

from ..base import TimestampedBase


class PromiseCategory(TimestampedBase, table=True):
    """Table: promise_categories"""

    __tablename__ = "promise_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class Promise(TimestampedBase, table=True):
    """Table: promises"""

    __tablename__ = "promises"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[int] = Field(default=None, foreign_key="promise_categories.id", ondelete="SET NULL")
    title_en: str
    title_bn: str
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    description_bn: Optional[str] = Field(default=None, sa_type=Text)
    status: PromiseStatus = Field(default=PromiseStatus.not_started, index=True)
    progress: int = Field(default=0, ge=0, le=100)
    target_date: Optional[date] = None
    completion_date: Optional[date] = None
    is_featured: bool = Field(default=False)
    is_active: bool = Field(default=True)
    display_order: int = Field(default=0)


class PromiseUpdate(TimestampedBase, table=True):
    """Progress report attached to a promise.

    Table: promise_updates
    """

    __tablename__ = "promise_updates"
    __table_args__ = ({"extend_existing": True},)

    promise_id: int = Field(foreign_key="promises.id", ondelete="CASCADE", index=True)
    title_en: str
    title_bn: Optional[str] = None
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    description_bn: Optional[str] = Field(default=None, sa_type=Text)
    progress_change: Optional[int] = None
    new_progress: Optional[int] = Field(default=None, ge=0, le=100)
    images: list[str] = Field(default_factory=list, sa_type=JSON)
    update_date: NaiveDatetime = Field(default_factory=utc_now)

"""Track-record achievements."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import TimestampedBase


class AchievementCategory(TimestampedBase, table=True):
    """Table: achievement_categories"""

    __tablename__ = "achievement_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class Achievement(TimestampedBase, table=True):
    """A completed project, with optional impact figures.

    ``impact_metrics`` holds free-form figures; ``people_helped`` and
    ``investment`` are summed by the public stats endpoint.

    Table: achievements
    """

    __tablename__ = "achievements"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[int] = Field(default=None, foreign_key="achievement_categories.id", ondelete="SET NULL")
    title_en: str
    title_bn: str
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    description_bn: Optional[str] = Field(default=None, sa_type=Text)
    image_url: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    achievement_date: Optional[date] = Field(default=None, index=True)
    impact_metrics: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    is_featured: bool = Field(default=False)
    is_active: bool = Field(default=True)
    display_order: int = Field(default=0)

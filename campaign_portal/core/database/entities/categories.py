"""Shared categories for news, events, photos and videos."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ContentType

from ..base import TimestampedBase


class Category(TimestampedBase, table=True):
    """Table: categories"""

    __tablename__ = "categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    content_type: ContentType = Field(index=True)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)

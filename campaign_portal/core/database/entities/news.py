"""News article entity."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON, Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ContentStatus

from ..base import TimestampedBase


class NewsArticle(TimestampedBase, table=True):
    """Bilingual news article with SEO fields.

    Table: news
    """

    __tablename__ = "news"
    __table_args__ = ({"extend_existing": True},)

    title_en: str
    title_bn: str
    content_en: str = Field(sa_type=Text)
    content_bn: str = Field(sa_type=Text)
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    featured_image: Optional[str] = None
    featured_image_alt_en: Optional[str] = None
    featured_image_alt_bn: Optional[str] = None
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", ondelete="SET NULL", index=True)
    author_name: Optional[str] = None
    read_time: int = Field(default=1, description="Estimated minutes to read")
    status: ContentStatus = Field(default=ContentStatus.draft, index=True)
    is_featured: bool = Field(default=False)
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    slug: str = Field(unique=True, index=True)
    keywords: list[str] = Field(default_factory=list, sa_type=JSON)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    published_at: Optional[NaiveDatetime] = Field(default=None, index=True)

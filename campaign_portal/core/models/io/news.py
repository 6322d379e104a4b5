"""News article I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import ContentStatus

from .categories import CategoryRead
from .common import EntityRead, NaiveUTCDatetime


class NewsBase(BaseModel):
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    content_en: str = Field(min_length=1)
    content_bn: str = Field(min_length=1)
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    featured_image: Optional[str] = None
    featured_image_alt_en: Optional[str] = None
    featured_image_alt_bn: Optional[str] = None
    category_id: Optional[int] = None
    author_name: Optional[str] = None
    status: ContentStatus = ContentStatus.draft
    is_featured: bool = False
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)


class NewsCreate(NewsBase):
    slug: Optional[str] = Field(default=None, description="Derived from title_en when omitted")
    read_time: Optional[int] = Field(default=None, ge=1, description="Computed from content_en when omitted")
    published_at: Optional[NaiveUTCDatetime] = None


class NewsUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    content_en: Optional[str] = None
    content_bn: Optional[str] = None
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    featured_image: Optional[str] = None
    featured_image_alt_en: Optional[str] = None
    featured_image_alt_bn: Optional[str] = None
    category_id: Optional[int] = None
    author_name: Optional[str] = None
    read_time: Optional[int] = Field(default=None, ge=1)
    status: Optional[ContentStatus] = None
    is_featured: Optional[bool] = None
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    slug: Optional[str] = None
    keywords: Optional[list[str]] = None
    published_at: Optional[NaiveUTCDatetime] = None


class NewsRead(NewsBase, EntityRead):
    slug: str
    read_time: int
    created_by: Optional[int] = None
    published_at: Optional[datetime] = None
    category: Optional[CategoryRead] = None

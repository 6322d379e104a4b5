"""Event I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import ContentStatus

from .categories import CategoryRead
from .common import EntityRead, NaiveUTCDatetime


class EventBase(BaseModel):
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    description_en: str = Field(min_length=1)
    description_bn: str = Field(min_length=1)
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    featured_image: Optional[str] = None
    featured_image_alt_en: Optional[str] = None
    featured_image_alt_bn: Optional[str] = None
    category_id: Optional[int] = None
    status: ContentStatus = ContentStatus.draft
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)


class EventCreate(EventBase):
    event_date: NaiveUTCDatetime
    event_end_date: Optional[NaiveUTCDatetime] = None
    slug: Optional[str] = Field(default=None, description="Derived from title_en when omitted")


class EventUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    event_date: Optional[NaiveUTCDatetime] = None
    event_end_date: Optional[NaiveUTCDatetime] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    featured_image: Optional[str] = None
    featured_image_alt_en: Optional[str] = None
    featured_image_alt_bn: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[ContentStatus] = None
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    slug: Optional[str] = None
    keywords: Optional[list[str]] = None


class EventRead(EventBase, EntityRead):
    slug: str
    event_date: datetime
    event_end_date: Optional[datetime] = None
    created_by: Optional[int] = None
    published_at: Optional[datetime] = None
    category: Optional[CategoryRead] = None

"""Testimonial I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from campaign_portal.core.models.domain.enums import ModerationStatus

from .common import EntityRead

MAX_TESTIMONIAL_LENGTH = 2000


class TestimonialCategoryCreate(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    slug: Optional[str] = None
    icon: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class TestimonialCategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class TestimonialCategoryRead(EntityRead):
    name_en: str
    name_bn: str
    slug: str
    icon: Optional[str] = None
    display_order: int
    is_active: bool


class TestimonialSubmit(BaseModel):
    """Public submission; always stored as pending."""

    category_id: Optional[int] = None
    person_name_en: str = Field(min_length=1)
    person_name_bn: Optional[str] = None
    person_photo: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    profession_en: Optional[str] = None
    profession_bn: Optional[str] = None
    content_en: str = Field(min_length=1, max_length=MAX_TESTIMONIAL_LENGTH)
    content_bn: Optional[str] = Field(default=None, max_length=MAX_TESTIMONIAL_LENGTH)
    video_url: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    submitter_email: Optional[EmailStr] = None
    submitter_phone: Optional[str] = None


class TestimonialModerate(BaseModel):
    status: Optional[ModerationStatus] = None
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None
    category_id: Optional[int] = None
    person_name_bn: Optional[str] = None
    content_bn: Optional[str] = None


class TestimonialPublic(EntityRead):
    """Fields shown on the public site (no submitter contact details)."""

    category_id: Optional[int] = None
    person_name_en: str
    person_name_bn: Optional[str] = None
    person_photo: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    profession_en: Optional[str] = None
    profession_bn: Optional[str] = None
    content_en: str
    content_bn: Optional[str] = None
    video_url: Optional[str] = None
    rating: Optional[int] = None
    is_featured: bool
    display_order: int
    submitted_at: datetime
    category: Optional[TestimonialCategoryRead] = None


class TestimonialRead(TestimonialPublic):
    """Console view including moderation and contact fields."""

    status: ModerationStatus
    submitter_email: Optional[str] = None
    submitter_phone: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None


class TestimonialStats(BaseModel):
    total: int
    with_video: int
    average_rating: Optional[float] = None
    by_category: dict[str, int] = Field(default_factory=dict)

"""Visitor testimonials and their categories."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ModerationStatus
from campaign_portal.core.utils import utc_now

from ..base import TimestampedBase


class TestimonialCategory(TimestampedBase, table=True):
    """Table: testimonial_categories"""

    __tablename__ = "testimonial_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    icon: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class Testimonial(TimestampedBase, table=True):
    """Submitted publicly, shown only once approved.

    Table: testimonials
    """

    __tablename__ = "testimonials"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[int] = Field(default=None, foreign_key="testimonial_categories.id", ondelete="SET NULL")
    person_name_en: str
    person_name_bn: Optional[str] = None
    person_photo: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    profession_en: Optional[str] = None
    profession_bn: Optional[str] = None
    content_en: str = Field(sa_type=Text)
    content_bn: Optional[str] = Field(default=None, sa_type=Text)
    video_url: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    submitter_email: Optional[str] = None
    submitter_phone: Optional[str] = None
    status: ModerationStatus = Field(default=ModerationStatus.pending, index=True)
    is_featured: bool = Field(default=False)
    display_order: int = Field(default=0)
    submitted_at: NaiveDatetime = Field(default_factory=utc_now)
    reviewed_at: Optional[NaiveDatetime] = None
    reviewed_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

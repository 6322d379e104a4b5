"""Media library rows for files uploaded through the console."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from campaign_portal.core.models.domain.enums import MediaKind

from ..base import TimestampedBase


class MediaItem(TimestampedBase, table=True):
    """Table: media_library"""

    __tablename__ = "media_library"
    __table_args__ = ({"extend_existing": True},)

    filename: str
    original_filename: str
    file_type: MediaKind = Field(index=True)
    mime_type: str
    file_size: int
    s3_key: str = Field(unique=True)
    s3_url: str
    cloudfront_url: Optional[str] = None
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    uploaded_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

"""Photo albums, photos and videos."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ContentStatus

from ..base import TimestampedBase


class PhotoAlbum(TimestampedBase, table=True):
    """Table: photo_albums"""

    __tablename__ = "photo_albums"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    cover_image: Optional[str] = None
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", ondelete="SET NULL")
    status: ContentStatus = Field(default=ContentStatus.draft, index=True)
    display_order: int = Field(default=0)
    slug: str = Field(unique=True, index=True)
    photo_count: int = Field(default=0, description="Maintained when photos are added, moved or removed")
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    published_at: Optional[NaiveDatetime] = None


class Photo(TimestampedBase, table=True):
    """Table: photos"""

    __tablename__ = "photos"
    __table_args__ = ({"extend_existing": True},)

    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    caption_en: Optional[str] = None
    caption_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    alt_text_en: Optional[str] = None
    alt_text_bn: Optional[str] = None
    image_url: str
    thumbnail_url: Optional[str] = None
    album_id: Optional[int] = Field(default=None, foreign_key="photo_albums.id", ondelete="CASCADE", index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", ondelete="SET NULL")
    display_order: int = Field(default=0)


class Video(TimestampedBase, table=True):
    """YouTube-hosted video.

    Table: videos
    """

    __tablename__ = "videos"
    __table_args__ = ({"extend_existing": True},)

    title_en: str
    title_bn: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    youtube_url: str
    youtube_id: str = Field(index=True)
    custom_thumbnail: Optional[str] = None
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", ondelete="SET NULL")
    status: ContentStatus = Field(default=ContentStatus.draft, index=True)
    is_featured: bool = Field(default=False)
    display_order: int = Field(default=0)
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    slug: str = Field(unique=True, index=True)
    keywords: list[str] = Field(default_factory=list, sa_type=JSON)
    duration: Optional[int] = Field(default=None, description="Length in seconds")
    view_count: int = Field(default=0)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    published_at: Optional[NaiveDatetime] = None

"""Photo album, photo and video I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import ContentStatus

from .common import EntityRead


class PhotoAlbumBase(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    cover_image: Optional[str] = None
    category_id: Optional[int] = None
    status: ContentStatus = ContentStatus.draft
    display_order: int = 0


class PhotoAlbumCreate(PhotoAlbumBase):
    slug: Optional[str] = None


class PhotoAlbumUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    cover_image: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[ContentStatus] = None
    display_order: Optional[int] = None
    slug: Optional[str] = None


class PhotoBase(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    caption_en: Optional[str] = None
    caption_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    alt_text_en: Optional[str] = None
    alt_text_bn: Optional[str] = None
    image_url: str = Field(min_length=1)
    thumbnail_url: Optional[str] = None
    album_id: Optional[int] = None
    category_id: Optional[int] = None
    display_order: int = 0


class PhotoCreate(PhotoBase):
    pass


class PhotoUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    caption_en: Optional[str] = None
    caption_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    alt_text_en: Optional[str] = None
    alt_text_bn: Optional[str] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    album_id: Optional[int] = None
    category_id: Optional[int] = None
    display_order: Optional[int] = None


class PhotoRead(PhotoBase, EntityRead):
    pass


class PhotoAlbumRead(PhotoAlbumBase, EntityRead):
    slug: str
    photo_count: int
    published_at: Optional[datetime] = None


class PhotoAlbumDetail(PhotoAlbumRead):
    photos: list[PhotoRead] = Field(default_factory=list)


class VideoBase(BaseModel):
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    youtube_url: str = Field(min_length=1)
    custom_thumbnail: Optional[str] = None
    category_id: Optional[int] = None
    status: ContentStatus = ContentStatus.draft
    is_featured: bool = False
    display_order: int = 0
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    duration: Optional[int] = Field(default=None, ge=0)


class VideoCreate(VideoBase):
    slug: Optional[str] = None


class VideoUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    youtube_url: Optional[str] = None
    custom_thumbnail: Optional[str] = None
    category_id: Optional[int] = None
    status: Optional[ContentStatus] = None
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None
    meta_title_en: Optional[str] = None
    meta_title_bn: Optional[str] = None
    meta_description_en: Optional[str] = None
    meta_description_bn: Optional[str] = None
    slug: Optional[str] = None
    keywords: Optional[list[str]] = None
    duration: Optional[int] = Field(default=None, ge=0)


class VideoRead(VideoBase, EntityRead):
    slug: str
    youtube_id: str
    view_count: int
    published_at: Optional[datetime] = None
    thumbnail_url: Optional[str] = None

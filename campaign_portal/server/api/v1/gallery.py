"""
Gallery Endpoints.

Published photo albums (with their photos) and YouTube videos.
"""

from typing import Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Photo, PhotoAlbum, Video
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.gallery import PhotoAlbumDetail, PhotoAlbumRead, PhotoRead, VideoRead
from campaign_portal.core.utils import youtube_thumbnail
from campaign_portal.server.services.content import not_found, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

photo_router = APIRouter()
video_router = APIRouter()


def video_read(video: Video) -> VideoRead:
    """Read model with the thumbnail resolved (custom image, else YouTube's)."""
    item = VideoRead.model_validate(video)
    item.thumbnail_url = video.custom_thumbnail or youtube_thumbnail(video.youtube_id)
    return item


@photo_router.get(
    "",
    summary="List Photo Albums",
    description="Published photo albums ordered by display order, newest first within the same order.",
    response_description="A page of albums with photo counts.",
)
async def list_albums(session: SessionDep, page: PageDep, category: Optional[int] = None):
    stmt = select(PhotoAlbum).where(PhotoAlbum.status == ContentStatus.published)
    if category is not None:
        stmt = stmt.where(PhotoAlbum.category_id == category)
    stmt = stmt.order_by(PhotoAlbum.display_order, PhotoAlbum.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([PhotoAlbumRead.model_validate(a) for a in rows], total, page)


@photo_router.get(
    "/{slug}",
    summary="Get Photo Album",
    description="One published album with its photos in display order.",
    response_description="The album and its photos.",
    responses={404: {"description": "Album not found"}},
)
async def get_album(slug: str, session: SessionDep):
    result = await session.execute(
        select(PhotoAlbum).where(PhotoAlbum.slug == slug, PhotoAlbum.status == ContentStatus.published)
    )
    album = result.scalars().first()
    if album is None:
        raise not_found("Album")

    photos = await session.execute(
        select(Photo).where(Photo.album_id == album.id).order_by(Photo.display_order, Photo.id)
    )
    detail = PhotoAlbumDetail.model_validate(album)
    detail.photos = [PhotoRead.model_validate(p) for p in photos.scalars().all()]
    return ok(detail)


@video_router.get(
    "",
    summary="List Videos",
    description="Published videos, featured filterable, in display order.",
    response_description="A page of videos.",
)
async def list_videos(
    session: SessionDep,
    page: PageDep,
    featured: Optional[bool] = None,
    category: Optional[int] = None,
):
    stmt = select(Video).where(Video.status == ContentStatus.published)
    if featured is not None:
        stmt = stmt.where(Video.is_featured == featured)
    if category is not None:
        stmt = stmt.where(Video.category_id == category)
    stmt = stmt.order_by(Video.display_order, Video.published_at.desc(), Video.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([video_read(v) for v in rows], total, page)

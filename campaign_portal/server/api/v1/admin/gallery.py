"""
Console Gallery Management.

Photo albums, the photos inside them and YouTube videos. An album's
``photo_count`` follows every photo that is added, moved or removed.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Category, Photo, PhotoAlbum, Video
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.gallery import (
    PhotoAlbumCreate,
    PhotoAlbumDetail,
    PhotoAlbumRead,
    PhotoAlbumUpdate,
    PhotoCreate,
    PhotoRead,
    PhotoUpdate,
    VideoCreate,
    VideoUpdate,
)
from campaign_portal.core.utils import extract_youtube_id, utc_now
from campaign_portal.server.api.v1.gallery import video_read
from campaign_portal.server.services.content import (
    bad_request,
    changes,
    ensure_exists,
    get_or_404,
    ok,
    paged,
    resolve_slug,
    stamp_published,
)
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

logger = get_logger(__name__)
albums_router = APIRouter()
photos_router = APIRouter()
videos_router = APIRouter()


def _adjust_count(album: Optional[PhotoAlbum], delta: int) -> None:
    if album is not None:
        album.photo_count = max(0, album.photo_count + delta)
        album.updated_at = utc_now()


# ---------------------------------------------------------------------------
# Albums
# ---------------------------------------------------------------------------


@albums_router.get("", summary="List Albums")
async def list_albums(session: SessionDep, page: PageDep, status: Optional[ContentStatus] = None):
    stmt = select(PhotoAlbum)
    if status is not None:
        stmt = stmt.where(PhotoAlbum.status == status)
    stmt = stmt.order_by(PhotoAlbum.display_order, PhotoAlbum.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([PhotoAlbumRead.model_validate(a) for a in rows], total, page)


@albums_router.get("/{album_id}", summary="Get Album", description="Album with all of its photos.")
async def get_album(album_id: int, session: SessionDep):
    album = await get_or_404(session, PhotoAlbum, album_id, "Album")
    photos = await session.execute(
        select(Photo).where(Photo.album_id == album.id).order_by(Photo.display_order, Photo.id)
    )
    detail = PhotoAlbumDetail.model_validate(album)
    detail.photos = [PhotoRead.model_validate(p) for p in photos.scalars().all()]
    return ok(detail)


@albums_router.post("", status_code=status.HTTP_201_CREATED, summary="Create Album")
async def create_album(album_in: PhotoAlbumCreate, session: SessionDep, user: StaffUser):
    await ensure_exists(session, Category, album_in.category_id, "category")
    data = album_in.model_dump()
    data["slug"] = await resolve_slug(session, PhotoAlbum, data.get("slug"), album_in.name_en)
    stamp_published(None, data)
    album = await AsyncRepository(session, PhotoAlbum).create(PhotoAlbum(**data, created_by=user.id))
    return ok(PhotoAlbumRead.model_validate(album), message="Album created")


@albums_router.patch("/{album_id}", summary="Update Album")
async def update_album(album_id: int, album_in: PhotoAlbumUpdate, session: SessionDep):
    album = await get_or_404(session, PhotoAlbum, album_id, "Album")
    data = changes(album_in, "name_en", "name_bn", "slug", "status", "display_order")
    if "category_id" in data:
        await ensure_exists(session, Category, data["category_id"], "category")
    if "slug" in data:
        data["slug"] = await resolve_slug(session, PhotoAlbum, data["slug"], None, exclude_id=album.id)
    stamp_published(album, data)
    album = await AsyncRepository(session, PhotoAlbum).update(album, data)
    return ok(PhotoAlbumRead.model_validate(album), message="Album updated")


@albums_router.delete("/{album_id}", summary="Delete Album", description="Deletes the album and its photos.")
async def delete_album(album_id: int, session: SessionDep):
    album = await get_or_404(session, PhotoAlbum, album_id, "Album")
    photos = await session.execute(select(Photo).where(Photo.album_id == album.id))
    for photo in photos.scalars().all():
        await session.delete(photo)
    await AsyncRepository(session, PhotoAlbum).delete(album)
    return ok(DeleteResult(id=album_id), message="Album deleted")


# ---------------------------------------------------------------------------
# Photos
# ---------------------------------------------------------------------------


@photos_router.get("", summary="List Photos")
async def list_photos(session: SessionDep, page: PageDep, album_id: Optional[int] = None):
    stmt = select(Photo)
    if album_id is not None:
        stmt = stmt.where(Photo.album_id == album_id)
    stmt = stmt.order_by(Photo.display_order, Photo.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([PhotoRead.model_validate(p) for p in rows], total, page)


@photos_router.get("/{photo_id}", summary="Get Photo")
async def get_photo(photo_id: int, session: SessionDep):
    return ok(PhotoRead.model_validate(await get_or_404(session, Photo, photo_id, "Photo")))


@photos_router.post("", status_code=status.HTTP_201_CREATED, summary="Add Photo")
async def create_photo(photo_in: PhotoCreate, session: SessionDep):
    album = None
    if photo_in.album_id is not None:
        album = await session.get(PhotoAlbum, photo_in.album_id)
        if album is None:
            raise bad_request("Unknown album")
    await ensure_exists(session, Category, photo_in.category_id, "category")

    photo = Photo(**photo_in.model_dump())
    session.add(photo)
    _adjust_count(album, 1)
    if album is not None:
        session.add(album)
    await session.commit()
    await session.refresh(photo)
    return ok(PhotoRead.model_validate(photo), message="Photo added")


@photos_router.patch("/{photo_id}", summary="Update Photo", description="Moving a photo updates both album counts.")
async def update_photo(photo_id: int, photo_in: PhotoUpdate, session: SessionDep):
    photo = await get_or_404(session, Photo, photo_id, "Photo")
    data = changes(photo_in, "image_url", "display_order")
    if "category_id" in data:
        await ensure_exists(session, Category, data["category_id"], "category")

    if "album_id" in data and data["album_id"] != photo.album_id:
        new_album = None
        if data["album_id"] is not None:
            new_album = await session.get(PhotoAlbum, data["album_id"])
            if new_album is None:
                raise bad_request("Unknown album")
        old_album = await session.get(PhotoAlbum, photo.album_id) if photo.album_id is not None else None
        _adjust_count(old_album, -1)
        _adjust_count(new_album, 1)
        for album in (old_album, new_album):
            if album is not None:
                session.add(album)

    photo = await AsyncRepository(session, Photo).update(photo, data)
    return ok(PhotoRead.model_validate(photo), message="Photo updated")


@photos_router.delete("/{photo_id}", summary="Delete Photo")
async def delete_photo(photo_id: int, session: SessionDep):
    photo = await get_or_404(session, Photo, photo_id, "Photo")
    if photo.album_id is not None:
        album = await session.get(PhotoAlbum, photo.album_id)
        _adjust_count(album, -1)
        if album is not None:
            session.add(album)
    await AsyncRepository(session, Photo).delete(photo)
    return ok(DeleteResult(id=photo_id), message="Photo deleted")


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------


def _youtube_id(url: str) -> str:
    video_id = extract_youtube_id(url)
    if video_id is None:
        raise bad_request("Invalid YouTube URL")
    return video_id


@videos_router.get("", summary="List Videos")
async def list_videos(
    session: SessionDep,
    page: PageDep,
    status: Optional[ContentStatus] = None,
    search: Optional[str] = None,
):
    stmt = select(Video)
    if status is not None:
        stmt = stmt.where(Video.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Video.title_en.ilike(pattern), Video.title_bn.ilike(pattern)))
    stmt = stmt.order_by(Video.display_order, Video.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([video_read(v) for v in rows], total, page)


@videos_router.get("/{video_id}", summary="Get Video")
async def get_video(video_id: int, session: SessionDep):
    return ok(video_read(await get_or_404(session, Video, video_id, "Video")))


@videos_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Video",
    responses={400: {"description": "Invalid YouTube URL or duplicate slug"}},
)
async def create_video(video_in: VideoCreate, session: SessionDep, user: StaffUser):
    await ensure_exists(session, Category, video_in.category_id, "category")
    data = video_in.model_dump()
    data["youtube_id"] = _youtube_id(video_in.youtube_url)
    data["slug"] = await resolve_slug(session, Video, data.get("slug"), video_in.title_en)
    stamp_published(None, data)
    video = await AsyncRepository(session, Video).create(Video(**data, created_by=user.id))
    return ok(video_read(video), message="Video created")


@videos_router.patch("/{video_id}", summary="Update Video")
async def update_video(video_id: int, video_in: VideoUpdate, session: SessionDep):
    video = await get_or_404(session, Video, video_id, "Video")
    data = changes(video_in, "title_en", "title_bn", "youtube_url", "slug", "status", "is_featured", "display_order")
    if "category_id" in data:
        await ensure_exists(session, Category, data["category_id"], "category")
    if "youtube_url" in data:
        data["youtube_id"] = _youtube_id(data["youtube_url"])
    if "slug" in data:
        data["slug"] = await resolve_slug(session, Video, data["slug"], None, exclude_id=video.id)
    stamp_published(video, data)
    video = await AsyncRepository(session, Video).update(video, data)
    return ok(video_read(video), message="Video updated")


@videos_router.delete("/{video_id}", summary="Delete Video")
async def delete_video(video_id: int, session: SessionDep):
    video = await get_or_404(session, Video, video_id, "Video")
    await AsyncRepository(session, Video).delete(video)
    return ok(DeleteResult(id=video_id), message="Video deleted")

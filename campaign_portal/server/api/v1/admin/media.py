"""
Console Media Library.

Browse every file uploaded through the ``media`` scope, edit its
descriptive text, and delete it. Deleting removes the stored object before
the library row, so a storage failure leaves the row in place.
"""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import extract, func, or_
from sqlmodel import select

from campaign_portal.core.database.entities import MediaItem
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import MediaKind
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.media import MediaDateBucket, MediaItemRead, MediaItemUpdate
from campaign_portal.server.services.content import get_or_404, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep, StorageDep

logger = get_logger(__name__)
router = APIRouter()


@router.get("", summary="List Media")
async def list_media(
    session: SessionDep,
    page: PageDep,
    file_type: Optional[MediaKind] = None,
    search: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
):
    """
    List library items, newest first.

    - **search**: Matches file names, alt text or caption
    - **year** / **month**: Upload date
    """
    stmt = select(MediaItem)
    if file_type is not None:
        stmt = stmt.where(MediaItem.file_type == file_type)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                MediaItem.original_filename.ilike(pattern),
                MediaItem.filename.ilike(pattern),
                MediaItem.alt_text.ilike(pattern),
                MediaItem.caption.ilike(pattern),
            )
        )
    if year is not None:
        stmt = stmt.where(extract("year", MediaItem.created_at) == year)
    if month is not None:
        stmt = stmt.where(extract("month", MediaItem.created_at) == month)
    stmt = stmt.order_by(MediaItem.created_at.desc(), MediaItem.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([MediaItemRead.model_validate(m) for m in rows], total, page)


@router.get("/dates", summary="Media Dates", description="Months that have uploads, newest first, with counts.")
async def media_dates(session: SessionDep):
    year = extract("year", MediaItem.created_at)
    month = extract("month", MediaItem.created_at)
    result = await session.execute(
        select(year.label("year"), month.label("month"), func.count().label("count"))
        .group_by(year, month)
        .order_by(year.desc(), month.desc())
    )
    return ok([MediaDateBucket(year=int(y), month=int(m), count=c) for y, m, c in result.all()])


@router.get("/{media_id}", summary="Get Media Item")
async def get_media(media_id: int, session: SessionDep):
    return ok(MediaItemRead.model_validate(await get_or_404(session, MediaItem, media_id, "Media item")))


@router.patch("/{media_id}", summary="Update Media Item", description="Edit alt text, caption or description.")
async def update_media(media_id: int, update: MediaItemUpdate, session: SessionDep):
    item = await get_or_404(session, MediaItem, media_id, "Media item")
    item = await AsyncRepository(session, MediaItem).update(item, update.model_dump(exclude_unset=True))
    return ok(MediaItemRead.model_validate(item), message="Media item updated")


@router.delete(
    "/{media_id}",
    summary="Delete Media Item",
    responses={500: {"description": "The stored object could not be removed"}},
)
async def delete_media(media_id: int, session: SessionDep, storage: StorageDep):
    item = await get_or_404(session, MediaItem, media_id, "Media item")
    await storage.delete_object(item.s3_key)
    await AsyncRepository(session, MediaItem).delete(item)
    logger.info(f"Deleted media item {media_id} ({item.s3_key})")
    return ok(DeleteResult(id=media_id), message="Media item deleted")

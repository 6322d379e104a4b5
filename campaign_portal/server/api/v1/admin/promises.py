"""
Console Promise Tracker Management.

Promises, their progress reports and the promise categories. Posting an
update with ``new_progress`` moves the promise itself: 100 completes it
(stamping the completion date), anything above zero marks it in progress.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import Promise, PromiseCategory, PromiseUpdate
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import PromiseStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.promises import (
    PromiseCategoryCreate,
    PromiseCategoryRead,
    PromiseCategoryUpdate,
    PromiseCreate,
    PromiseEdit,
    PromiseUpdateCreate,
    PromiseUpdateRead,
)
from campaign_portal.core.utils import utc_now
from campaign_portal.server.api.v1.promises import promise_reads
from campaign_portal.server.services.content import changes, ensure_exists, get_or_404, not_found, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

from .taxonomy import category_router

logger = get_logger(__name__)
router = APIRouter()
categories_router = category_router(
    PromiseCategory, PromiseCategoryCreate, PromiseCategoryUpdate, PromiseCategoryRead, "Promise category"
)


def apply_progress(promise: Promise, progress: int) -> None:
    """Move a promise to ``progress`` percent and derive its status."""
    promise.progress = progress
    if progress >= 100:
        promise.status = PromiseStatus.completed
        if promise.completion_date is None:
            promise.completion_date = utc_now().date()
    elif progress > 0:
        promise.status = PromiseStatus.in_progress


@router.get("", summary="List Promises", description="All promises, including inactive ones.")
async def list_promises(
    session: SessionDep,
    page: PageDep,
    status: Optional[PromiseStatus] = None,
    category_id: Optional[int] = None,
):
    stmt = select(Promise)
    if status is not None:
        stmt = stmt.where(Promise.status == status)
    if category_id is not None:
        stmt = stmt.where(Promise.category_id == category_id)
    stmt = stmt.order_by(Promise.display_order, Promise.created_at.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await promise_reads(session, rows), total, page)


@router.get("/{promise_id}", summary="Get Promise")
async def get_promise(promise_id: int, session: SessionDep):
    promise = await get_or_404(session, Promise, promise_id, "Promise")
    return ok((await promise_reads(session, [promise]))[0])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Promise")
async def create_promise(promise_in: PromiseCreate, session: SessionDep):
    await ensure_exists(session, PromiseCategory, promise_in.category_id, "promise category")
    promise = await AsyncRepository(session, Promise).create(Promise(**promise_in.model_dump()))
    return ok((await promise_reads(session, [promise]))[0], message="Promise created")


@router.patch("/{promise_id}", summary="Update Promise")
async def update_promise(promise_id: int, promise_in: PromiseEdit, session: SessionDep):
    promise = await get_or_404(session, Promise, promise_id, "Promise")
    data = changes(promise_in, "title_en", "title_bn", "status", "progress", "is_featured", "is_active", "display_order")
    if "category_id" in data:
        await ensure_exists(session, PromiseCategory, data["category_id"], "promise category")
    if data.get("status") == PromiseStatus.completed and promise.completion_date is None:
        data.setdefault("completion_date", utc_now().date())
    promise = await AsyncRepository(session, Promise).update(promise, data)
    return ok((await promise_reads(session, [promise]))[0], message="Promise updated")


@router.delete("/{promise_id}", summary="Delete Promise", description="Deletes the promise and its updates.")
async def delete_promise(promise_id: int, session: SessionDep):
    promise = await get_or_404(session, Promise, promise_id, "Promise")
    updates = await session.execute(select(PromiseUpdate).where(PromiseUpdate.promise_id == promise.id))
    for update in updates.scalars().all():
        await session.delete(update)
    await AsyncRepository(session, Promise).delete(promise)
    return ok(DeleteResult(id=promise_id), message="Promise deleted")


@router.get("/{promise_id}/updates", summary="List Promise Updates")
async def list_updates(promise_id: int, session: SessionDep):
    await get_or_404(session, Promise, promise_id, "Promise")
    result = await session.execute(
        select(PromiseUpdate)
        .where(PromiseUpdate.promise_id == promise_id)
        .order_by(PromiseUpdate.update_date.desc(), PromiseUpdate.id.desc())
    )
    return ok([PromiseUpdateRead.model_validate(u) for u in result.scalars().all()])


@router.post(
    "/{promise_id}/updates",
    status_code=status.HTTP_201_CREATED,
    summary="Add Promise Update",
    description="Record a progress report; ``new_progress`` also updates the promise.",
)
async def add_update(promise_id: int, update_in: PromiseUpdateCreate, session: SessionDep):
    promise = await get_or_404(session, Promise, promise_id, "Promise")
    update = PromiseUpdate(**update_in.model_dump(), promise_id=promise.id)
    session.add(update)
    if update_in.new_progress is not None:
        apply_progress(promise, update_in.new_progress)
        promise.updated_at = utc_now()
        session.add(promise)
    await session.commit()
    await session.refresh(update)
    logger.info(f"Promise {promise.id} update recorded (progress {promise.progress}%)")
    return ok(PromiseUpdateRead.model_validate(update), message="Update added")


@router.delete("/{promise_id}/updates/{update_id}", summary="Delete Promise Update")
async def delete_update(promise_id: int, update_id: int, session: SessionDep):
    update = await get_or_404(session, PromiseUpdate, update_id, "Promise update")
    if update.promise_id != promise_id:
        raise not_found("Promise update")
    await AsyncRepository(session, PromiseUpdate).delete(update)
    return ok(DeleteResult(id=update_id), message="Update deleted")

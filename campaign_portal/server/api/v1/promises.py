"""
Promise Tracker Endpoints.

Manifesto promises with their progress updates, categories and summary
statistics.
"""

from collections import defaultdict
from typing import Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Promise, PromiseCategory, PromiseUpdate
from campaign_portal.core.models.domain.enums import PromiseStatus
from campaign_portal.core.models.io.promises import (
    PromiseCategoryRead,
    PromiseRead,
    PromiseStats,
    PromiseUpdateRead,
)
from campaign_portal.server.services.content import ok, with_categories
from campaign_portal.server.services.deps import SessionDep

router = APIRouter()


async def promise_reads(session, promises: list) -> list[PromiseRead]:
    """Read models with category and updates (newest first) attached."""
    items = await with_categories(session, promises, PromiseRead, PromiseCategory, PromiseCategoryRead)
    ids = [p.id for p in promises]
    if not ids:
        return items
    result = await session.execute(
        select(PromiseUpdate)
        .where(PromiseUpdate.promise_id.in_(ids))
        .order_by(PromiseUpdate.update_date.desc(), PromiseUpdate.id.desc())
    )
    updates = defaultdict(list)
    for update in result.scalars().all():
        updates[update.promise_id].append(PromiseUpdateRead.model_validate(update))
    for item in items:
        item.updates = updates.get(item.id, [])
    return items


@router.get(
    "",
    summary="List Promises",
    description="Active promises in display order, with category and progress updates.",
    response_description="List of promises.",
)
async def list_promises(
    session: SessionDep,
    category: Optional[str] = None,
    status: Optional[PromiseStatus] = None,
    featured: Optional[bool] = None,
):
    """
    List active promises.

    - **category**: Promise category slug
    - **status**: not_started, in_progress, completed or delayed
    - **featured**: Only featured promises when true
    """
    stmt = select(Promise).where(Promise.is_active == True)  # noqa: E712
    if category:
        stmt = stmt.join(PromiseCategory, PromiseCategory.id == Promise.category_id).where(
            PromiseCategory.slug == category
        )
    if status is not None:
        stmt = stmt.where(Promise.status == status)
    if featured is not None:
        stmt = stmt.where(Promise.is_featured == featured)
    stmt = stmt.order_by(Promise.display_order, Promise.id)
    result = await session.execute(stmt)
    return ok(await promise_reads(session, list(result.scalars().all())))


@router.get(
    "/categories",
    summary="List Promise Categories",
    description="Active promise categories in display order.",
    response_description="List of promise categories.",
)
async def list_promise_categories(session: SessionDep):
    result = await session.execute(
        select(PromiseCategory)
        .where(PromiseCategory.is_active == True)  # noqa: E712
        .order_by(PromiseCategory.display_order, PromiseCategory.id)
    )
    return ok([PromiseCategoryRead.model_validate(c) for c in result.scalars().all()])


@router.get(
    "/stats",
    summary="Promise Statistics",
    description="Counts per status and the average progress of active promises.",
    response_description="Promise statistics.",
)
async def promise_stats(session: SessionDep):
    result = await session.execute(select(Promise).where(Promise.is_active == True))  # noqa: E712
    promises = list(result.scalars().all())
    total = len(promises)
    by_status = defaultdict(int)
    for promise in promises:
        by_status[promise.status] += 1
    average = round(sum(p.progress for p in promises) / total) if total else 0
    stats = PromiseStats(
        total=total,
        completed=by_status[PromiseStatus.completed],
        in_progress=by_status[PromiseStatus.in_progress],
        not_started=by_status[PromiseStatus.not_started],
        delayed=by_status[PromiseStatus.delayed],
        average_progress=average,
    )
    return ok(stats)

"""
Event Endpoints.

Published events; upcoming ones soonest first, past ones latest first.
"""

from typing import Literal, Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Event
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.events import EventRead
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.content import not_found, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep

router = APIRouter()


@router.get(
    "",
    summary="List Events",
    description="Published events, filterable by time window and category.",
    response_description="A page of events.",
)
async def list_events(
    session: SessionDep,
    page: PageDep,
    filter: Optional[Literal["past", "upcoming"]] = None,
    category: Optional[int] = None,
):
    """
    List published events.

    - **filter**: ``upcoming`` (event date from now on, ascending) or ``past``
      (before now, descending); all events descending when omitted
    - **category**: Category id
    """
    now = utc_now()
    stmt = select(Event).where(Event.status == ContentStatus.published)
    if category is not None:
        stmt = stmt.where(Event.category_id == category)
    if filter == "upcoming":
        stmt = stmt.where(Event.event_date >= now).order_by(Event.event_date.asc())
    elif filter == "past":
        stmt = stmt.where(Event.event_date < now).order_by(Event.event_date.desc())
    else:
        stmt = stmt.order_by(Event.event_date.desc())

    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await with_categories(session, rows, EventRead), total, page)


@router.get(
    "/{slug}",
    summary="Get Event",
    description="One published event by slug.",
    response_description="The event.",
    responses={404: {"description": "Event not found"}},
)
async def get_event(slug: str, session: SessionDep):
    result = await session.execute(select(Event).where(Event.slug == slug, Event.status == ContentStatus.published))
    event = result.scalars().first()
    if event is None:
        raise not_found("Event")
    items = await with_categories(session, [event], EventRead)
    return ok(items[0])

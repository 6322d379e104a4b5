"""Console event management."""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Category, Event
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.events import EventCreate, EventRead, EventUpdate
from campaign_portal.server.services.content import (
    bad_request,
    changes,
    ensure_exists,
    get_or_404,
    ok,
    paged,
    resolve_slug,
    stamp_published,
    with_categories,
)
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

logger = get_logger(__name__)
router = APIRouter()

_REQUIRED = ("title_en", "title_bn", "description_en", "description_bn", "slug", "status", "event_date")


async def _read(session, event: Event) -> EventRead:
    items = await with_categories(session, [event], EventRead)
    return items[0]


def _check_window(start, end) -> None:
    if start is not None and end is not None and end < start:
        raise bad_request("event_end_date must not be before event_date")


@router.get("", summary="List Events", description="All events, latest event date first.")
async def list_events(
    session: SessionDep,
    page: PageDep,
    status: Optional[ContentStatus] = None,
    category: Optional[int] = None,
    search: Optional[str] = None,
):
    stmt = select(Event)
    if status is not None:
        stmt = stmt.where(Event.status == status)
    if category is not None:
        stmt = stmt.where(Event.category_id == category)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Event.title_en.ilike(pattern), Event.title_bn.ilike(pattern)))
    stmt = stmt.order_by(Event.event_date.desc(), Event.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await with_categories(session, rows, EventRead), total, page)


@router.get("/{event_id}", summary="Get Event")
async def get_event(event_id: int, session: SessionDep):
    return ok(await _read(session, await get_or_404(session, Event, event_id, "Event")))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Event")
async def create_event(event_in: EventCreate, session: SessionDep, user: StaffUser):
    await ensure_exists(session, Category, event_in.category_id, "category")
    _check_window(event_in.event_date, event_in.event_end_date)
    data = event_in.model_dump()
    data["slug"] = await resolve_slug(session, Event, data.get("slug"), event_in.title_en)
    stamp_published(None, data)
    event = await AsyncRepository(session, Event).create(Event(**data, created_by=user.id))
    logger.info(f"Event {event.id} created by user {user.id}")
    return ok(await _read(session, event), message="Event created")


@router.patch("/{event_id}", summary="Update Event")
async def update_event(event_id: int, event_in: EventUpdate, session: SessionDep):
    event = await get_or_404(session, Event, event_id, "Event")
    data = changes(event_in, *_REQUIRED)
    if "category_id" in data:
        await ensure_exists(session, Category, data["category_id"], "category")
    if "slug" in data:
        data["slug"] = await resolve_slug(session, Event, data["slug"], None, exclude_id=event.id)
    _check_window(data.get("event_date", event.event_date), data.get("event_end_date", event.event_end_date))
    stamp_published(event, data)
    event = await AsyncRepository(session, Event).update(event, data)
    return ok(await _read(session, event), message="Event updated")


@router.delete("/{event_id}", summary="Delete Event")
async def delete_event(event_id: int, session: SessionDep):
    event = await get_or_404(session, Event, event_id, "Event")
    await AsyncRepository(session, Event).delete(event)
    return ok(DeleteResult(id=event_id), message="Event deleted")

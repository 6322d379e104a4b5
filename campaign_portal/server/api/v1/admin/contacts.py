"""Console inbox for contact-form messages."""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import ContactMessage
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.models.domain.enums import ContactStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.contacts import ContactRead, ContactStatusUpdate
from campaign_portal.server.services.content import get_or_404, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

router = APIRouter()


@router.get("", summary="List Messages")
async def list_messages(
    session: SessionDep, page: PageDep, status: Optional[ContactStatus] = None, search: Optional[str] = None
):
    stmt = select(ContactMessage)
    if status is not None:
        stmt = stmt.where(ContactMessage.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                ContactMessage.name.ilike(pattern),
                ContactMessage.email.ilike(pattern),
                ContactMessage.subject.ilike(pattern),
            )
        )
    stmt = stmt.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([ContactRead.model_validate(m) for m in rows], total, page)


@router.get("/{message_id}", summary="Get Message")
async def get_message(message_id: int, session: SessionDep):
    return ok(ContactRead.model_validate(await get_or_404(session, ContactMessage, message_id, "Message")))


@router.patch("/{message_id}", summary="Update Message Status")
async def update_message(message_id: int, update: ContactStatusUpdate, session: SessionDep):
    message = await get_or_404(session, ContactMessage, message_id, "Message")
    message = await AsyncRepository(session, ContactMessage).update(message, {"status": update.status})
    return ok(ContactRead.model_validate(message), message="Message updated")


@router.delete("/{message_id}", summary="Delete Message")
async def delete_message(message_id: int, session: SessionDep):
    message = await get_or_404(session, ContactMessage, message_id, "Message")
    await AsyncRepository(session, ContactMessage).delete(message)
    return ok(DeleteResult(id=message_id), message="Message deleted")

"""
Console Complaint Handling.

Complaints are listed with ward/status/priority filters and worked through
their lifecycle. Moving a complaint to ``responded`` or ``resolved`` stamps
the response time once.
"""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Complaint
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ComplaintStatus, Priority
from campaign_portal.core.models.io.complaints import ComplaintAdminUpdate, ComplaintRead
from campaign_portal.core.utils import utc_now
from campaign_portal.server.api.v1.complaints import normalize_ward
from campaign_portal.server.services.content import changes, get_or_404, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()

RESPONDED_STATUSES = (ComplaintStatus.responded, ComplaintStatus.resolved)


@router.get("", summary="List Complaints")
async def list_complaints(
    session: SessionDep,
    page: PageDep,
    status: Optional[ComplaintStatus] = None,
    priority: Optional[Priority] = None,
    ward: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
):
    """
    List complaints, newest first.

    - **ward**: Ward number; ``3`` and ``03`` are the same ward
    - **search**: Matches tracking id, subject or message
    """
    stmt = select(Complaint)
    if status is not None:
        stmt = stmt.where(Complaint.status == status)
    if priority is not None:
        stmt = stmt.where(Complaint.priority == priority)
    if ward:
        stmt = stmt.where(Complaint.ward == normalize_ward(ward))
    if category:
        stmt = stmt.where(Complaint.category == category)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                Complaint.tracking_id.ilike(pattern),
                Complaint.subject.ilike(pattern),
                Complaint.message.ilike(pattern),
            )
        )
    stmt = stmt.order_by(Complaint.created_at.desc(), Complaint.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([ComplaintRead.model_validate(c) for c in rows], total, page)


@router.get("/{complaint_id}", summary="Get Complaint")
async def get_complaint(complaint_id: int, session: SessionDep):
    return ok(ComplaintRead.model_validate(await get_or_404(session, Complaint, complaint_id, "Complaint")))


@router.patch("/{complaint_id}", summary="Update Complaint", description="Change status or priority, add notes or a response.")
async def update_complaint(complaint_id: int, update: ComplaintAdminUpdate, session: SessionDep):
    complaint = await get_or_404(session, Complaint, complaint_id, "Complaint")
    data = changes(update, "status", "priority")
    if data.get("status") in RESPONDED_STATUSES and complaint.responded_at is None:
        data["responded_at"] = utc_now()
    complaint = await AsyncRepository(session, Complaint).update(complaint, data)
    if "status" in data:
        logger.info(f"Complaint {complaint.tracking_id} moved to {complaint.status.value}")
    return ok(ComplaintRead.model_validate(complaint), message="Complaint updated")

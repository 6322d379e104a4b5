"""
Console Emergency Desk.

SOS requests sorted by urgency, with status and notes updates.
"""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import case
from sqlmodel import select

from campaign_portal.core.database.entities import EmergencyRequest
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import EmergencyStatus, Priority
from campaign_portal.core.models.io.emergency import EmergencyRequestRead, EmergencyRequestUpdate
from campaign_portal.server.services.content import changes, get_or_404, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()

_URGENCY = case(
    (EmergencyRequest.priority == Priority.urgent, 0),
    (EmergencyRequest.priority == Priority.high, 1),
    (EmergencyRequest.priority == Priority.medium, 2),
    else_=3,
)


@router.get("", summary="List SOS Requests", description="Most urgent first, newest first within a priority.")
async def list_requests(
    session: SessionDep,
    page: PageDep,
    status: Optional[EmergencyStatus] = None,
    priority: Optional[Priority] = None,
    request_type: Optional[str] = None,
    ward: Optional[str] = None,
):
    stmt = select(EmergencyRequest)
    if status is not None:
        stmt = stmt.where(EmergencyRequest.status == status)
    if priority is not None:
        stmt = stmt.where(EmergencyRequest.priority == priority)
    if request_type:
        stmt = stmt.where(EmergencyRequest.request_type == request_type)
    if ward:
        stmt = stmt.where(EmergencyRequest.ward == ward)
    stmt = stmt.order_by(_URGENCY, EmergencyRequest.created_at.desc(), EmergencyRequest.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([EmergencyRequestRead.model_validate(r) for r in rows], total, page)


@router.get("/{request_id}", summary="Get SOS Request")
async def get_request(request_id: int, session: SessionDep):
    return ok(EmergencyRequestRead.model_validate(await get_or_404(session, EmergencyRequest, request_id, "Request")))


@router.patch("/{request_id}", summary="Update SOS Request")
async def update_request(request_id: int, update: EmergencyRequestUpdate, session: SessionDep):
    emergency = await get_or_404(session, EmergencyRequest, request_id, "Request")
    data = changes(update, "status", "priority")
    emergency = await AsyncRepository(session, EmergencyRequest).update(emergency, data)
    if "status" in data:
        logger.info(f"SOS request {emergency.id} moved to {emergency.status.value}")
    return ok(EmergencyRequestRead.model_validate(emergency), message="Request updated")

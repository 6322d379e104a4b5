"""
Emergency Endpoints.

SOS requests from citizens (optionally with a voice recording uploaded
through the ``emergency`` upload scope) and the emergency contact directory.
"""

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import EmergencyContact, EmergencyRequest
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import EmergencyStatus
from campaign_portal.core.models.io.emergency import EmergencyContactRead, EmergencyRequestRead, SosRequest
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "/sos",
    status_code=status.HTTP_201_CREATED,
    summary="Send SOS",
    description="Record an emergency request for the response team.",
    response_description="The stored request.",
)
async def send_sos(sos: SosRequest, session: SessionDep):
    """
    Send an SOS.

    - **phone**: Required
    - **name**: Defaults to ``Anonymous``
    - **request_type**: Defaults to ``general``
    - **audio_url**: Optional recording from the ``emergency`` upload scope
    """
    data = sos.model_dump()
    data["name"] = (sos.name or "").strip() or "Anonymous"
    data["request_type"] = (sos.request_type or "").strip() or "general"
    request = EmergencyRequest(**data, status=EmergencyStatus.pending)
    session.add(request)
    await session.commit()
    await session.refresh(request)
    logger.warning(f"SOS {request.id} received ({request.request_type}, priority {request.priority.value})")
    return ok(EmergencyRequestRead.model_validate(request), message="Your request has been received. Help is on the way.")


@router.get(
    "/contacts",
    summary="List Emergency Contacts",
    description="Active emergency contacts in display order.",
    response_description="List of contacts.",
)
async def list_contacts(session: SessionDep):
    result = await session.execute(
        select(EmergencyContact)
        .where(EmergencyContact.is_active == True)  # noqa: E712
        .order_by(EmergencyContact.display_order, EmergencyContact.id)
    )
    return ok([EmergencyContactRead.model_validate(c) for c in result.scalars().all()])

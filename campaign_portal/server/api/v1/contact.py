"""Contact form endpoint."""

from fastapi import APIRouter, status

from campaign_portal.core.database.entities import ContactMessage
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ContactStatus
from campaign_portal.core.models.io.contacts import ContactRead, ContactSubmit
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Send Contact Message",
    description="Store a message from the contact form.",
    response_description="The stored message.",
)
async def submit_contact(submission: ContactSubmit, session: SessionDep):
    """
    Send a message to the campaign office.

    - **name**, **email**, **subject**, **message**: Required
    - **phone**: Optional
    """
    message = ContactMessage(**submission.model_dump(), status=ContactStatus.pending)
    session.add(message)
    await session.commit()
    await session.refresh(message)
    logger.info(f"Contact message {message.id} received")
    return ok(ContactRead.model_validate(message), message="Thank you for contacting us. We will get back to you soon.")

"""SMS sending endpoint for console staff."""

from fastapi import APIRouter

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.sms import SmsSendRequest, SmsSendResult
from campaign_portal.core.utils import gateway_phone, normalize_bd_phone
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import SmsDep, StaffUser

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "/send",
    summary="Send SMS",
    description="Send one SMS to a Bangladeshi mobile number through the gateway.",
    response_description="The number the gateway accepted and its response.",
    responses={
        400: {"description": "Invalid phone number"},
        401: {"description": "Authentication required"},
        403: {"description": "Insufficient permissions"},
        502: {"description": "The gateway refused or could not be reached"},
    },
)
async def send_sms(request: SmsSendRequest, sms: SmsDep, user: StaffUser):
    """
    Send an SMS.

    - **phone**: ``01XXXXXXXXX``, optionally with the ``88``/``+88`` prefix
    - **message**: Message text (unicode)
    """
    response = await sms.send(request.phone, request.message)
    local = normalize_bd_phone(request.phone)
    logger.info(f"User {user.id} sent an SMS")
    return ok(SmsSendResult(to=gateway_phone(local), gateway_response=response), message="SMS sent")

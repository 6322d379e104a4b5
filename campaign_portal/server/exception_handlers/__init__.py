"""
Exception handlers for the campaign portal server.

``setup_exception_handlers`` registers every handler on the application.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from campaign_portal.core.logging_config import get_logger
from campaign_portal.server.services.chunk_store import ChunkUploadError
from campaign_portal.server.services.sms import InvalidPhoneNumber, SmsGatewayError
from campaign_portal.server.services.storage import StorageError
from campaign_portal.server.services.upload_pipeline import UploadNotFound
from campaign_portal.server.services.upload_profiles import UploadRejected

from .global_handler import global_exception_handler
from .http_handler import (
    http_exception_handler,
    invalid_phone_handler,
    sms_gateway_error_handler,
    storage_error_handler,
    upload_not_found_handler,
    upload_rejected_handler,
    validation_exception_handler,
)

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UploadRejected, upload_rejected_handler)
    app.add_exception_handler(ChunkUploadError, upload_rejected_handler)
    app.add_exception_handler(UploadNotFound, upload_not_found_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(InvalidPhoneNumber, invalid_phone_handler)
    app.add_exception_handler(SmsGatewayError, sms_gateway_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = ["setup_exception_handlers"]

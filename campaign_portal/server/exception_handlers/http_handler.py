"""
Envelope-shaped handlers for expected errors.

``HTTPException`` keeps its status; request validation failures become 400;
domain errors raised by the services map to 400/404/500/502 with a message
that is safe to show. The underlying error is always logged.
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from campaign_portal.core.logging_config import get_logger
from campaign_portal.server.services.chunk_store import IncompleteUploadError
from campaign_portal.server.services.sms import InvalidPhoneNumber, SmsGatewayError
from campaign_portal.server.services.storage import StorageError, StorageNotConfiguredError
from campaign_portal.server.services.upload_pipeline import UploadNotFound
from campaign_portal.server.services.upload_profiles import UploadRejected

logger = get_logger(__name__)


def error_response(status_code: int, error: str, headers=None, **extra) -> JSONResponse:
    content = {"success": False, "error": error}
    content.update({key: value for key, value in extra.items() if value is not None})
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Wrap ``HTTPException`` in the error envelope; dict details are merged in."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")

    headers = getattr(exc, "headers", None)
    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        message = str(detail.pop("error", "Request failed"))
        return error_response(exc.status_code, message, headers=headers, **detail)
    return error_response(exc.status_code, str(exc.detail), headers=headers)


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request validation failures to 400 with per-field details."""
    details = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": _clean_message(str(error.get("msg", ""))),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {details}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details=details)


async def upload_rejected_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info(f"Upload rejected on {request.url.path}: {exc}")
    extra = {"missing_chunks": exc.missing} if isinstance(exc, IncompleteUploadError) else {}
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), **extra)


async def upload_not_found_handler(request: Request, exc: UploadNotFound) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    if isinstance(exc, StorageNotConfiguredError):
        logger.error(f"Storage not configured, missing: {exc.missing}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "File storage is not configured")
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "File storage operation failed")


async def invalid_phone_handler(request: Request, exc: InvalidPhoneNumber) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def sms_gateway_error_handler(request: Request, exc: SmsGatewayError) -> JSONResponse:
    logger.error(f"SMS gateway failure: {exc}")
    if str(exc) == "SMS gateway is not configured":
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SMS service is not configured")
    return error_response(status.HTTP_502_BAD_GATEWAY, "Failed to send SMS")

"""
Health and version endpoints.

``/health`` is polled by the load balancer: it pings the database and reports
whether object storage and the SMS gateway are configured. Only a failing
database makes the service unhealthy (503); the optional integrations are
reported but do not fail the check.
"""

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from campaign_portal.core.logging_config import get_logger
from campaign_portal.server.core import constant
from campaign_portal.server.core.config import settings
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", summary="Health Check", response_description="Service and dependency status.")
async def health_check(response: Response, session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check database ping failed: {e}")
        database = "unavailable"

    healthy = database == "ok"
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if healthy else "degraded",
        "database": database,
        "storage_configured": not settings.aws.missing(),
        "sms_configured": settings.sms.configured,
    }


@router.get("/version", summary="Get Version")
async def version():
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}

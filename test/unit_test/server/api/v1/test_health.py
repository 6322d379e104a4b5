from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from campaign_portal.core.database import get_session
from campaign_portal.server.core import constant

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check_pings_database(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"
    assert isinstance(body["storage_configured"], bool)
    assert isinstance(body["sms_configured"], bool)


async def test_health_check_reports_database_outage(app, client: AsyncClient):
    broken = AsyncMock()
    broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def broken_session():
        yield broken

    app.dependency_overrides[get_session] = broken_session
    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    assert response.json() == {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}


async def test_openapi_is_served_under_api_prefix(client: AsyncClient):
    response = await client.get("/api/v1/openapi.json")
    assert response.status_code == 200
    assert response.json()["info"]["title"] == constant.PROJECT_NAME


async def test_responses_carry_process_time(client: AsyncClient):
    response = await client.get("/health")
    assert "x-process-time" in response.headers

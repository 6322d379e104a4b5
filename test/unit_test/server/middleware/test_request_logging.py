"""Unit tests for the request logging middleware."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from campaign_portal.server.middleware import RequestLoggingMiddleware, request_logging

pytestmark = pytest.mark.asyncio


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    return app


async def test_adds_process_time_header(app):
    with patch("campaign_portal.server.middleware.request_logging.log_api_request") as mock_log:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/ok")

    assert response.status_code == 200
    assert float(response.headers["X-Process-Time"]) >= 0
    kwargs = mock_log.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["path"] == "/ok"
    assert kwargs["status_code"] == 200


async def test_failed_request_is_recorded_as_500(app):
    with patch("campaign_portal.server.middleware.request_logging.log_api_request") as mock_log, patch(
        "campaign_portal.server.middleware.request_logging.logger"
    ) as mock_logger:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom")

    assert response.status_code == 500
    assert mock_log.call_args.kwargs["status_code"] == 500
    mock_logger.error.assert_called_once()


async def test_slow_request_warning(app):
    with patch.object(request_logging, "SLOW_REQUEST_MS", -1), patch(
        "campaign_portal.server.middleware.request_logging.logger"
    ) as mock_logger:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/ok")

    assert response.status_code == 200
    assert "Slow API request" in mock_logger.warning.call_args[0][0]


async def test_health_polls_are_not_reported():
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    with patch("campaign_portal.server.middleware.request_logging.log_api_request") as mock_log:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

    assert response.status_code == 200
    assert "X-Process-Time" in response.headers
    mock_log.assert_not_called()

"""
Request logging middleware.

Times every request, reports it through the monitoring helpers and adds an
``X-Process-Time`` header. Load-balancer polls of ``/health`` get the header
but are not reported. Requests slower than one second are logged as warnings.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.monitoring import log_api_request
from campaign_portal.core.utils import client_ip

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000
UNREPORTED_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Records duration and status of API requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        reported = path not in UNREPORTED_PATHS

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={
                    "method": method,
                    "path": path,
                    "client_ip": client_ip(request),
                    "duration_ms": duration_ms,
                    "error": str(e),
                },
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        if reported:
            log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": response.status_code},
            )
        return response

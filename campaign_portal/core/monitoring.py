"""
Monitoring and Tracing Configuration Module.

Optional integration with Pydantic Logfire. When enabled it instruments the
FastAPI app, SQLAlchemy and HTTPX, and the helpers below forward request,
upload and error events to it. When disabled every helper degrades to
standard logging and never raises.
"""

import logging
import os
from typing import Any, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "campaign-portal")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_logfire_active = False


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Logfire for monitoring and tracing.

    Sets up instrumentation for SQLAlchemy, HTTPX (SMS gateway calls) and,
    when ``app`` is given, the FastAPI endpoints. Does nothing unless
    ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is set.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        if LOGFIRE_TRACE_SQLALCHEMY:
            try:
                logfire.instrument_sqlalchemy()
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if LOGFIRE_TRACE_HTTPX:
            try:
                logfire.instrument_httpx()
                logger.info("Logfire: HTTPX instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument HTTPX: {e}")

        if LOGFIRE_TRACE_FASTAPI and app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

        _logfire_active = True
        logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def _emit(level: str, message: str, **attributes: Any) -> None:
    if not _logfire_active:
        return
    try:
        import logfire

        getattr(logfire, level)(message, **attributes)
    except Exception as e:
        logger.debug(f"Failed to forward event to Logfire: {e}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Record a completed API request.

    Args:
        method: HTTP method
        path: Request path
        status_code: Response status code
        duration_ms: Request duration in milliseconds
    """
    logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
    _emit(
        "info",
        "API request {method} {path}",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_upload_event(scope: str, event: str, key: Optional[str] = None, size: Optional[int] = None) -> None:
    """
    Record an upload lifecycle event (stored, chunk received, multipart completed...).

    Args:
        scope: Upload scope name (media, emergency, ...)
        event: Short event name
        key: Object key, when known
        size: Payload size in bytes, when known
    """
    logger.info(f"Upload {event}: scope={scope} key={key} size={size}")
    _emit("info", "Upload {event}", scope=scope, event=event, key=key, size=size)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Record an error with optional context.

    Args:
        error_type: Error class or category
        error_message: Human readable message
        context: Additional attributes
    """
    logger.error(f"{error_type}: {error_message}", extra={"context": context or {}})
    _emit("error", "{error_type}: {error_message}", error_type=error_type, error_message=error_message, **(context or {}))

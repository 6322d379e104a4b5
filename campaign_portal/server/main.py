"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campaign_portal.core.database import init_db
from campaign_portal.core.logging_config import get_logger, setup_logging
from campaign_portal.core.monitoring import initialize_logfire

from .api.v1 import (
    achievements,
    ama,
    auth,
    categories,
    challenges,
    complaints,
    contact,
    emergency,
    events,
    gallery,
    health,
    news,
    promises,
    seo,
    site_settings,
    sms,
    store,
    testimonials,
    uploads,
    voters,
)
from .api.v1 import admin
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .services.chunk_store import ChunkSweeper, chunk_store

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup and runs the chunk sweeper, which
    expires abandoned chunked uploads, until shutdown.
    """
    # Startup
    try:
        logger.info("Starting up Campaign Portal Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    sweeper = ChunkSweeper(chunk_store, settings.uploads.sweep_interval_seconds)
    sweeper.start()

    yield

    # Shutdown
    logger.info("Shutting down Campaign Portal Server...")
    await sweeper.stop()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Campaign Portal API

    Public content for the constituency campaign site (news, events, gallery,
    promises, achievements, testimonials, AMA, complaints, store, voter
    search, challenges, emergency SOS), the staff admin console, and file
    uploads to object storage.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

API = constant.API_V1_STR

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{API}/auth", tags=["auth"])
app.include_router(categories.router, prefix=f"{API}/categories", tags=["categories"])
app.include_router(news.router, prefix=f"{API}/news", tags=["news"])
app.include_router(events.router, prefix=f"{API}/events", tags=["events"])
app.include_router(gallery.photo_router, prefix=f"{API}/photo-gallery", tags=["gallery"])
app.include_router(gallery.video_router, prefix=f"{API}/video-gallery", tags=["gallery"])
app.include_router(promises.router, prefix=f"{API}/promises", tags=["promises"])
app.include_router(achievements.router, prefix=f"{API}/achievements", tags=["achievements"])
app.include_router(testimonials.router, prefix=f"{API}/testimonials", tags=["testimonials"])
app.include_router(ama.router, prefix=f"{API}/ama", tags=["ama"])
app.include_router(complaints.router, prefix=f"{API}/complaints", tags=["complaints"])
app.include_router(contact.router, prefix=f"{API}/contact", tags=["contact"])
app.include_router(store.router, prefix=f"{API}/store", tags=["store"])
app.include_router(voters.router, prefix=f"{API}/voters", tags=["voters"])
app.include_router(challenges.router, prefix=f"{API}/challenges", tags=["challenges"])
app.include_router(emergency.router, prefix=f"{API}/emergency", tags=["emergency"])
app.include_router(site_settings.router, prefix=f"{API}/settings", tags=["settings"])
app.include_router(sms.router, prefix=f"{API}/sms", tags=["sms"])
app.include_router(uploads.router, prefix=f"{API}/uploads", tags=["uploads"])
app.include_router(seo.router, prefix=API, tags=["seo"])
app.include_router(admin.router, prefix=f"{API}/admin")

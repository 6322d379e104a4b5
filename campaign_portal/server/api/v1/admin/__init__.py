"""
Admin console API.

Every route below requires an admin or moderator session; user management
additionally requires the admin role. Category sub-routers are included
before their parent resources so ``/promises/categories`` is not taken for
a promise id.
"""

from fastapi import APIRouter, Depends

from campaign_portal.server.services.auth import require_admin, require_staff

from . import (
    achievements,
    ama,
    categories,
    challenges,
    complaints,
    contacts,
    emergency,
    events,
    gallery,
    media,
    news,
    promises,
    site_settings,
    store,
    testimonials,
    users,
    voters,
)

router = APIRouter(dependencies=[Depends(require_staff)])

router.include_router(categories.router, prefix="/categories", tags=["admin: categories"])
router.include_router(news.router, prefix="/news", tags=["admin: news"])
router.include_router(events.router, prefix="/events", tags=["admin: events"])
router.include_router(gallery.albums_router, prefix="/photo-gallery/albums", tags=["admin: gallery"])
router.include_router(gallery.photos_router, prefix="/photo-gallery/photos", tags=["admin: gallery"])
router.include_router(gallery.videos_router, prefix="/video-gallery", tags=["admin: gallery"])
router.include_router(promises.categories_router, prefix="/promises/categories", tags=["admin: promises"])
router.include_router(promises.router, prefix="/promises", tags=["admin: promises"])
router.include_router(achievements.categories_router, prefix="/achievements/categories", tags=["admin: achievements"])
router.include_router(achievements.router, prefix="/achievements", tags=["admin: achievements"])
router.include_router(testimonials.categories_router, prefix="/testimonials/categories", tags=["admin: testimonials"])
router.include_router(testimonials.router, prefix="/testimonials", tags=["admin: testimonials"])
router.include_router(ama.categories_router, prefix="/ama/categories", tags=["admin: ama"])
router.include_router(ama.router, prefix="/ama/questions", tags=["admin: ama"])
router.include_router(complaints.router, prefix="/complaints", tags=["admin: inbox"])
router.include_router(contacts.router, prefix="/contacts", tags=["admin: inbox"])
router.include_router(emergency.router, prefix="/emergency", tags=["admin: inbox"])
router.include_router(store.products_router, prefix="/store/products", tags=["admin: store"])
router.include_router(store.orders_router, prefix="/store/orders", tags=["admin: store"])
router.include_router(voters.voters_router, prefix="/voters", tags=["admin: voters"])
router.include_router(voters.metadata_router, prefix="/voter-metadata", tags=["admin: voters"])
router.include_router(challenges.router, prefix="/challenges", tags=["admin: challenges"])
router.include_router(media.router, prefix="/media", tags=["admin: media"])
router.include_router(site_settings.router, prefix="/settings", tags=["admin: settings"])
router.include_router(
    users.router, prefix="/users", tags=["admin: users"], dependencies=[Depends(require_admin)]
)

__all__ = ["router"]

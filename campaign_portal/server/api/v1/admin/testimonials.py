"""
Console Testimonial Moderation.

Submissions arrive as ``pending``; moderators approve or reject them,
feature them and fill in translations. Changing the status records who
reviewed the testimonial and when.
"""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Testimonial, TestimonialCategory
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ModerationStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io import testimonials as io
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.content import changes, ensure_exists, get_or_404, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

from .taxonomy import category_router

logger = get_logger(__name__)
router = APIRouter()
categories_router = category_router(
    TestimonialCategory,
    io.TestimonialCategoryCreate,
    io.TestimonialCategoryUpdate,
    io.TestimonialCategoryRead,
    "Testimonial category",
)


async def _reads(session, rows: list) -> list:
    return await with_categories(session, rows, io.TestimonialRead, TestimonialCategory, io.TestimonialCategoryRead)


@router.get("", summary="List Testimonials", description="All submissions, newest first.")
async def list_testimonials(
    session: SessionDep,
    page: PageDep,
    status: Optional[ModerationStatus] = None,
    search: Optional[str] = None,
):
    stmt = select(Testimonial)
    if status is not None:
        stmt = stmt.where(Testimonial.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Testimonial.person_name_en.ilike(pattern), Testimonial.content_en.ilike(pattern)))
    stmt = stmt.order_by(Testimonial.submitted_at.desc(), Testimonial.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await _reads(session, rows), total, page)


@router.get("/{testimonial_id}", summary="Get Testimonial")
async def get_testimonial(testimonial_id: int, session: SessionDep):
    testimonial = await get_or_404(session, Testimonial, testimonial_id, "Testimonial")
    return ok((await _reads(session, [testimonial]))[0])


@router.patch("/{testimonial_id}", summary="Moderate Testimonial")
async def moderate_testimonial(
    testimonial_id: int, moderation: io.TestimonialModerate, session: SessionDep, user: StaffUser
):
    testimonial = await get_or_404(session, Testimonial, testimonial_id, "Testimonial")
    data = changes(moderation, "status", "is_featured", "display_order")
    if "category_id" in data:
        await ensure_exists(session, TestimonialCategory, data["category_id"], "testimonial category")
    if "status" in data and data["status"] != testimonial.status:
        data["reviewed_at"] = utc_now()
        data["reviewed_by"] = user.id
        logger.info(f"Testimonial {testimonial.id} moved to {data['status'].value} by user {user.id}")
    testimonial = await AsyncRepository(session, Testimonial).update(testimonial, data)
    return ok((await _reads(session, [testimonial]))[0], message="Testimonial updated")


@router.delete("/{testimonial_id}", summary="Delete Testimonial")
async def delete_testimonial(testimonial_id: int, session: SessionDep):
    testimonial = await get_or_404(session, Testimonial, testimonial_id, "Testimonial")
    await AsyncRepository(session, Testimonial).delete(testimonial)
    return ok(DeleteResult(id=testimonial_id), message="Testimonial deleted")

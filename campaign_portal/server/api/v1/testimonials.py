"""
Testimonial Endpoints.

Approved testimonials for the public site and the public submission form.
Submissions are stored as pending until a moderator approves them.
"""

from collections import Counter
from typing import Optional

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import Testimonial, TestimonialCategory
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ModerationStatus
from campaign_portal.core.models.io.testimonials import (
    TestimonialCategoryRead,
    TestimonialPublic,
    TestimonialStats,
    TestimonialSubmit,
)
from campaign_portal.server.services.content import bad_request, load_by_ids, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "",
    summary="List Testimonials",
    description="Approved testimonials, featured first, then by display order and newest.",
    response_description="A page of testimonials.",
)
async def list_testimonials(
    session: SessionDep,
    page: PageDep,
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    has_video: Optional[bool] = None,
):
    """
    List approved testimonials.

    - **category**: Testimonial category slug
    - **featured**: Only featured testimonials when true
    - **has_video**: Only testimonials with (true) or without (false) a video
    """
    stmt = select(Testimonial).where(Testimonial.status == ModerationStatus.approved)
    if category:
        stmt = stmt.join(TestimonialCategory, TestimonialCategory.id == Testimonial.category_id).where(
            TestimonialCategory.slug == category
        )
    if featured is not None:
        stmt = stmt.where(Testimonial.is_featured == featured)
    if has_video is True:
        stmt = stmt.where(Testimonial.video_url.is_not(None), Testimonial.video_url != "")
    elif has_video is False:
        stmt = stmt.where((Testimonial.video_url.is_(None)) | (Testimonial.video_url == ""))
    stmt = stmt.order_by(
        Testimonial.is_featured.desc(), Testimonial.display_order, Testimonial.submitted_at.desc()
    )
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    items = await with_categories(session, rows, TestimonialPublic, TestimonialCategory, TestimonialCategoryRead)
    return paged(items, total, page)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Submit Testimonial",
    description="Submit a testimonial for moderation.",
    response_description="The stored submission (pending).",
    responses={400: {"description": "Validation failed or unknown category"}},
)
async def submit_testimonial(submission: TestimonialSubmit, session: SessionDep):
    """
    Submit a testimonial.

    - **person_name_en**: Name shown with the testimonial (required)
    - **content_en**: Testimonial text, at most 2000 characters (required)
    - **video_url**: Optional video uploaded through the ``testimonials`` upload scope
    - **rating**: Optional 1-5 rating
    """
    if submission.category_id is not None:
        if await session.get(TestimonialCategory, submission.category_id) is None:
            raise bad_request("Unknown testimonial category")

    testimonial = Testimonial(**submission.model_dump(), status=ModerationStatus.pending)
    session.add(testimonial)
    await session.commit()
    await session.refresh(testimonial)
    logger.info(f"Testimonial {testimonial.id} submitted for review")
    return ok(
        TestimonialPublic.model_validate(testimonial),
        message="Thank you! Your testimonial will appear once it has been reviewed.",
    )


@router.get(
    "/categories",
    summary="List Testimonial Categories",
    description="Active testimonial categories in display order.",
    response_description="List of categories.",
)
async def list_testimonial_categories(session: SessionDep):
    result = await session.execute(
        select(TestimonialCategory)
        .where(TestimonialCategory.is_active == True)  # noqa: E712
        .order_by(TestimonialCategory.display_order, TestimonialCategory.id)
    )
    return ok([TestimonialCategoryRead.model_validate(c) for c in result.scalars().all()])


@router.get(
    "/stats",
    summary="Testimonial Statistics",
    description="Totals over approved testimonials.",
    response_description="Testimonial statistics.",
)
async def testimonial_stats(session: SessionDep):
    result = await session.execute(select(Testimonial).where(Testimonial.status == ModerationStatus.approved))
    testimonials = list(result.scalars().all())
    ratings = [t.rating for t in testimonials if t.rating]
    categories = await load_by_ids(session, TestimonialCategory, (t.category_id for t in testimonials))
    by_category = Counter(
        categories[t.category_id].slug if t.category_id in categories else "uncategorized" for t in testimonials
    )
    stats = TestimonialStats(
        total=len(testimonials),
        with_video=sum(1 for t in testimonials if t.video_url),
        average_rating=round(sum(ratings) / len(ratings), 1) if ratings else None,
        by_category=dict(by_category),
    )
    return ok(stats)

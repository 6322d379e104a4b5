"""Public category listing."""

from typing import Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Category
from campaign_portal.core.models.domain.enums import ContentType
from campaign_portal.core.models.io.categories import CategoryRead
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import SessionDep

router = APIRouter()


@router.get(
    "",
    summary="List Categories",
    description="Active categories ordered by display order, optionally for one content type.",
    response_description="List of categories.",
)
async def list_categories(session: SessionDep, content_type: Optional[ContentType] = None):
    stmt = select(Category).where(Category.is_active == True)  # noqa: E712
    if content_type is not None:
        stmt = stmt.where(Category.content_type == content_type)
    stmt = stmt.order_by(Category.display_order, Category.name_en)
    result = await session.execute(stmt)
    return ok([CategoryRead.model_validate(c) for c in result.scalars().all()])

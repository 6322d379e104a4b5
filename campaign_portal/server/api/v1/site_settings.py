"""Public site settings, grouped by category."""

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import SiteSetting
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import SessionDep

router = APIRouter()


@router.get(
    "/{category}",
    summary="Get Settings Category",
    description="Public settings of one category as a key/value map.",
    response_description="Mapping of setting key to value.",
)
async def get_settings_category(category: str, session: SessionDep):
    result = await session.execute(
        select(SiteSetting).where(SiteSetting.category == category, SiteSetting.is_public == True)  # noqa: E712
    )
    return ok({s.key: s.value for s in result.scalars().all()})

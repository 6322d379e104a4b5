"""
Achievement Endpoints.

Track-record projects and their aggregated impact.
"""

from typing import Any, Optional

from fastapi import APIRouter
from sqlalchemy import extract
from sqlmodel import select

from campaign_portal.core.database.entities import Achievement, AchievementCategory
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.achievements import AchievementCategoryRead, AchievementRead, AchievementStats
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core.config import settings
from campaign_portal.server.services.content import ok, with_categories
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


def _number(value: Any) -> float:
    """Numeric value of an impact figure; strings like ``"1,200"`` are accepted."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return 0


@router.get(
    "",
    summary="List Achievements",
    description="Active achievements in display order, latest first within the same order.",
    response_description="List of achievements.",
)
async def list_achievements(
    session: SessionDep,
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    year: Optional[int] = None,
):
    """
    List active achievements.

    - **category**: Achievement category slug
    - **featured**: Only featured achievements when true
    - **year**: Calendar year of the achievement date
    """
    stmt = select(Achievement).where(Achievement.is_active == True)  # noqa: E712
    if category:
        stmt = stmt.join(AchievementCategory, AchievementCategory.id == Achievement.category_id).where(
            AchievementCategory.slug == category
        )
    if featured is not None:
        stmt = stmt.where(Achievement.is_featured == featured)
    if year is not None:
        stmt = stmt.where(extract("year", Achievement.achievement_date) == year)
    stmt = stmt.order_by(Achievement.display_order, Achievement.achievement_date.desc(), Achievement.id.desc())
    result = await session.execute(stmt)
    items = await with_categories(
        session, list(result.scalars().all()), AchievementRead, AchievementCategory, AchievementCategoryRead
    )
    return ok(items)


@router.get(
    "/categories",
    summary="List Achievement Categories",
    description="Active achievement categories in display order.",
    response_description="List of achievement categories.",
)
async def list_achievement_categories(session: SessionDep):
    result = await session.execute(
        select(AchievementCategory)
        .where(AchievementCategory.is_active == True)  # noqa: E712
        .order_by(AchievementCategory.display_order, AchievementCategory.id)
    )
    return ok([AchievementCategoryRead.model_validate(c) for c in result.scalars().all()])


@router.get(
    "/stats",
    summary="Achievement Statistics",
    description="Project count, people helped and investment summed over active achievements.",
    response_description="Achievement statistics.",
)
async def achievement_stats(session: SessionDep):
    result = await session.execute(select(Achievement).where(Achievement.is_active == True))  # noqa: E712
    achievements = list(result.scalars().all())
    people = sum(_number((a.impact_metrics or {}).get("people_helped")) for a in achievements)
    investment = sum(_number((a.impact_metrics or {}).get("investment")) for a in achievements)
    stats = AchievementStats(
        total_projects=len(achievements),
        total_people_helped=int(people),
        total_investment=float(investment),
        years_of_service=max(0, utc_now().year - settings.service_start_year),
    )
    return ok(stats)

"""Console management of achievements and achievement categories."""

from typing import Optional

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import Achievement, AchievementCategory
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.models.io.achievements import (
    AchievementCategoryCreate,
    AchievementCategoryRead,
    AchievementCategoryUpdate,
    AchievementCreate,
    AchievementRead,
    AchievementUpdate,
)
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.server.services.content import changes, ensure_exists, get_or_404, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep

from .taxonomy import category_router

router = APIRouter()
categories_router = category_router(
    AchievementCategory,
    AchievementCategoryCreate,
    AchievementCategoryUpdate,
    AchievementCategoryRead,
    "Achievement category",
)


async def _reads(session, rows: list) -> list[AchievementRead]:
    return await with_categories(session, rows, AchievementRead, AchievementCategory, AchievementCategoryRead)


@router.get("", summary="List Achievements")
async def list_achievements(session: SessionDep, page: PageDep, category_id: Optional[int] = None):
    stmt = select(Achievement)
    if category_id is not None:
        stmt = stmt.where(Achievement.category_id == category_id)
    stmt = stmt.order_by(Achievement.display_order, Achievement.achievement_date.desc(), Achievement.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await _reads(session, rows), total, page)


@router.get("/{achievement_id}", summary="Get Achievement")
async def get_achievement(achievement_id: int, session: SessionDep):
    achievement = await get_or_404(session, Achievement, achievement_id, "Achievement")
    return ok((await _reads(session, [achievement]))[0])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Achievement")
async def create_achievement(achievement_in: AchievementCreate, session: SessionDep):
    await ensure_exists(session, AchievementCategory, achievement_in.category_id, "achievement category")
    achievement = await AsyncRepository(session, Achievement).create(Achievement(**achievement_in.model_dump()))
    return ok((await _reads(session, [achievement]))[0], message="Achievement created")


@router.patch("/{achievement_id}", summary="Update Achievement")
async def update_achievement(achievement_id: int, achievement_in: AchievementUpdate, session: SessionDep):
    achievement = await get_or_404(session, Achievement, achievement_id, "Achievement")
    data = changes(achievement_in, "title_en", "title_bn", "impact_metrics", "is_featured", "is_active", "display_order")
    if "category_id" in data:
        await ensure_exists(session, AchievementCategory, data["category_id"], "achievement category")
    achievement = await AsyncRepository(session, Achievement).update(achievement, data)
    return ok((await _reads(session, [achievement]))[0], message="Achievement updated")


@router.delete("/{achievement_id}", summary="Delete Achievement")
async def delete_achievement(achievement_id: int, session: SessionDep):
    achievement = await get_or_404(session, Achievement, achievement_id, "Achievement")
    await AsyncRepository(session, Achievement).delete(achievement)
    return ok(DeleteResult(id=achievement_id), message="Achievement deleted")

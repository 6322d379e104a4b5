"""Console management of site settings (key/value pairs grouped by category)."""

from typing import List, Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import SiteSetting
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.site_settings import SettingBulkItem, SettingRead, SettingWrite
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.content import not_found, ok
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


async def _upsert(session, key: str, setting_in: SettingWrite) -> SiteSetting:
    result = await session.execute(select(SiteSetting).where(SiteSetting.key == key))
    setting = result.scalars().first()
    if setting is None:
        setting = SiteSetting(key=key, **setting_in.model_dump(exclude={"key"}))
    else:
        for name, value in setting_in.model_dump(exclude={"key"}).items():
            setattr(setting, name, value)
        setting.updated_at = utc_now()
    session.add(setting)
    return setting


@router.get("", summary="List Settings")
async def list_settings(session: SessionDep, category: Optional[str] = None):
    stmt = select(SiteSetting)
    if category:
        stmt = stmt.where(SiteSetting.category == category)
    result = await session.execute(stmt.order_by(SiteSetting.category, SiteSetting.key))
    return ok([SettingRead.model_validate(s) for s in result.scalars().all()])


@router.put("/bulk", summary="Upsert Settings", description="Create or replace several settings at once.")
async def bulk_upsert(items: List[SettingBulkItem], session: SessionDep):
    settings = [await _upsert(session, item.key, item) for item in items]
    await session.commit()
    for setting in settings:
        await session.refresh(setting)
    logger.info(f"Upserted {len(settings)} site setting(s)")
    return ok([SettingRead.model_validate(s) for s in settings], message="Settings saved")


@router.get("/{key}", summary="Get Setting")
async def get_setting(key: str, session: SessionDep):
    result = await session.execute(select(SiteSetting).where(SiteSetting.key == key))
    setting = result.scalars().first()
    if setting is None:
        raise not_found("Setting")
    return ok(SettingRead.model_validate(setting))


@router.put("/{key}", summary="Upsert Setting", description="Create the setting or replace its value and attributes.")
async def upsert_setting(key: str, setting_in: SettingWrite, session: SessionDep):
    setting = await _upsert(session, key, setting_in)
    await session.commit()
    await session.refresh(setting)
    return ok(SettingRead.model_validate(setting), message="Setting saved")

"""Achievement I/O models."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field

from .common import EntityRead


class AchievementCategoryBase(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class AchievementCategoryCreate(AchievementCategoryBase):
    slug: Optional[str] = None


class AchievementCategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class AchievementCategoryRead(AchievementCategoryBase, EntityRead):
    slug: str


class AchievementBase(BaseModel):
    category_id: Optional[int] = None
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    image_url: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    achievement_date: Optional[date] = None
    impact_metrics: dict[str, Any] = Field(
        default_factory=dict, description="Free-form figures such as people_helped and investment"
    )
    is_featured: bool = False
    is_active: bool = True
    display_order: int = 0


class AchievementCreate(AchievementBase):
    pass


class AchievementUpdate(BaseModel):
    category_id: Optional[int] = None
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    image_url: Optional[str] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    achievement_date: Optional[date] = None
    impact_metrics: Optional[dict[str, Any]] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class AchievementRead(AchievementBase, EntityRead):
    category: Optional[AchievementCategoryRead] = None


class AchievementStats(BaseModel):
    total_projects: int
    total_people_helped: int
    total_investment: float
    years_of_service: int

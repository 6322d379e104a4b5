"""Promise tracker I/O models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import PromiseStatus

from .common import EntityRead


class PromiseCategoryBase(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class PromiseCategoryCreate(PromiseCategoryBase):
    slug: Optional[str] = None


class PromiseCategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class PromiseCategoryRead(PromiseCategoryBase, EntityRead):
    slug: str


class PromiseUpdateCreate(BaseModel):
    """A progress report; ``new_progress`` also moves the promise itself."""

    title_en: str = Field(min_length=1)
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    progress_change: Optional[int] = None
    new_progress: Optional[int] = Field(default=None, ge=0, le=100)
    images: list[str] = Field(default_factory=list)


class PromiseUpdateRead(PromiseUpdateCreate, EntityRead):
    promise_id: int
    update_date: datetime


class PromiseBase(BaseModel):
    category_id: Optional[int] = None
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    status: PromiseStatus = PromiseStatus.not_started
    progress: int = Field(default=0, ge=0, le=100)
    target_date: Optional[date] = None
    completion_date: Optional[date] = None
    is_featured: bool = False
    is_active: bool = True
    display_order: int = 0


class PromiseCreate(PromiseBase):
    pass


class PromiseEdit(BaseModel):
    category_id: Optional[int] = None
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    status: Optional[PromiseStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    target_date: Optional[date] = None
    completion_date: Optional[date] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class PromiseRead(PromiseBase, EntityRead):
    category: Optional[PromiseCategoryRead] = None
    updates: list[PromiseUpdateRead] = Field(default_factory=list)


class PromiseStats(BaseModel):
    total: int
    completed: int
    in_progress: int
    not_started: int
    delayed: int
    average_progress: int

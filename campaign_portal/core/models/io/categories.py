"""Category I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import ContentType

from .common import EntityRead


class CategoryBase(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    content_type: ContentType
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class CategoryCreate(CategoryBase):
    slug: Optional[str] = Field(default=None, description="Derived from name_en when omitted")


class CategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    content_type: Optional[ContentType] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryRead(CategoryBase, EntityRead):
    slug: str

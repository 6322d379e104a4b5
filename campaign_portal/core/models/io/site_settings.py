"""Site settings I/O models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from .common import EntityRead


class SettingWrite(BaseModel):
    value: Any = None
    category: str = "general"
    description: Optional[str] = None
    is_public: bool = True


class SettingBulkItem(SettingWrite):
    key: str = Field(min_length=1, max_length=120)


class SettingRead(SettingWrite, EntityRead):
    key: str

"""Emergency SOS I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import EmergencyStatus, Priority

from .common import EntityRead


class SosRequest(BaseModel):
    name: Optional[str] = None
    phone: str = Field(min_length=1)
    request_type: str = "general"
    message: Optional[str] = Field(default=None, max_length=2000)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = None
    ward: Optional[str] = None
    audio_url: Optional[str] = None
    audio_duration: Optional[int] = Field(default=None, ge=0)
    priority: Priority = Priority.high


class EmergencyRequestRead(EntityRead):
    name: str
    phone: str
    request_type: str
    message: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    ward: Optional[str] = None
    audio_url: Optional[str] = None
    audio_duration: Optional[int] = None
    priority: Priority
    status: EmergencyStatus
    admin_notes: Optional[str] = None


class EmergencyRequestUpdate(BaseModel):
    status: Optional[EmergencyStatus] = None
    priority: Optional[Priority] = None
    admin_notes: Optional[str] = None


class EmergencyContactRead(EntityRead):
    name_en: str
    name_bn: str
    phone: str
    category: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int
    is_active: bool

"""Emergency SOS requests and the public emergency contact directory."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import EmergencyStatus, Priority

from ..base import TimestampedBase


class EmergencyRequest(TimestampedBase, table=True):
    """Table: emergency_requests"""

    __tablename__ = "emergency_requests"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(default="Anonymous")
    phone: str
    request_type: str = Field(default="general", index=True)
    message: Optional[str] = Field(default=None, sa_type=Text)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    ward: Optional[str] = None
    audio_url: Optional[str] = None
    audio_duration: Optional[int] = Field(default=None, description="Recording length in seconds")
    priority: Priority = Field(default=Priority.high, index=True)
    status: EmergencyStatus = Field(default=EmergencyStatus.pending, index=True)
    admin_notes: Optional[str] = Field(default=None, sa_type=Text)


class EmergencyContact(TimestampedBase, table=True):
    """Table: emergency_contacts"""

    __tablename__ = "emergency_contacts"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    phone: str
    category: str = Field(default="general")
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)

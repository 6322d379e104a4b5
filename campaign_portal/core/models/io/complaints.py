"""Complaint box I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from campaign_portal.core.models.domain.enums import ComplaintStatus, Priority

from .common import EntityRead


class ComplaintSubmit(BaseModel):
    """Public complaint; identity is required unless ``is_anonymous``."""

    ward: str = Field(min_length=1)
    category: str = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    is_anonymous: bool = False
    priority: Priority = Priority.medium
    attachments: list[str] = Field(default_factory=list, max_length=10)

    @model_validator(mode="after")
    def _identity_unless_anonymous(self) -> "ComplaintSubmit":
        if self.is_anonymous:
            self.name = None
            self.email = None
            self.phone = None
        elif not (self.name or "").strip() or not self.email:
            raise ValueError("Name and email are required for non-anonymous complaints")
        return self


class ComplaintTracking(BaseModel):
    """What a citizen sees when tracking a complaint."""

    model_config = {"from_attributes": True}

    tracking_id: str
    ward: str
    category: str
    subject: str
    status: ComplaintStatus
    priority: Priority
    admin_response: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ComplaintRead(EntityRead):
    tracking_id: str
    ward: str
    category: str
    subject: str
    message: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_anonymous: bool
    priority: Priority
    attachments: list[str]
    status: ComplaintStatus
    admin_notes: Optional[str] = None
    admin_response: Optional[str] = None
    responded_at: Optional[datetime] = None


class ComplaintAdminUpdate(BaseModel):
    status: Optional[ComplaintStatus] = None
    priority: Optional[Priority] = None
    admin_notes: Optional[str] = None
    admin_response: Optional[str] = None


class WardStats(BaseModel):
    ward: str
    total: int
    pending: int = 0
    in_progress: int = 0
    under_review: int = 0
    responded: int = 0
    resolved: int = 0
    rejected: int = 0
    intensity: float = Field(description="Share of the busiest ward's total, 0..1")


class ComplaintStatsSummary(BaseModel):
    total: int
    resolved: int
    pending: int
    resolution_rate: int = Field(description="Resolved share as a whole percentage")
    most_active_ward: Optional[str] = None


class ComplaintStats(BaseModel):
    wards: list[WardStats]
    summary: ComplaintStatsSummary

"""Citizen complaints, tracked publicly by tracking id."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON, Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ComplaintStatus, Priority

from ..base import TimestampedBase


class Complaint(TimestampedBase, table=True):
    """Table: complaints"""

    __tablename__ = "complaints"
    __table_args__ = ({"extend_existing": True},)

    tracking_id: str = Field(unique=True, index=True)
    ward: str = Field(index=True)
    category: str
    subject: str
    message: str = Field(sa_type=Text)
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_anonymous: bool = Field(default=False)
    priority: Priority = Field(default=Priority.medium)
    attachments: list[str] = Field(default_factory=list, sa_type=JSON)
    status: ComplaintStatus = Field(default=ComplaintStatus.pending, index=True)
    admin_notes: Optional[str] = Field(default=None, sa_type=Text)
    admin_response: Optional[str] = Field(default=None, sa_type=Text)
    responded_at: Optional[NaiveDatetime] = None

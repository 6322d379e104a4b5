"""Contact form submissions."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ContactStatus

from ..base import TimestampedBase


class ContactMessage(TimestampedBase, table=True):
    """Table: contact_messages"""

    __tablename__ = "contact_messages"
    __table_args__ = ({"extend_existing": True},)

    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str = Field(sa_type=Text)
    status: ContactStatus = Field(default=ContactStatus.pending, index=True)

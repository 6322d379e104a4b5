"""Contact form I/O models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from campaign_portal.core.models.domain.enums import ContactStatus

from .common import EntityRead


class ContactSubmit(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)


class ContactRead(EntityRead):
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus


class ContactStatusUpdate(BaseModel):
    status: ContactStatus

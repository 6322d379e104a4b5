"""
Shared I/O building blocks.

Every endpoint answers with the same envelope::

    {"success": true, "data": ..., "pagination": {...}, "message": "..."}
    {"success": false, "error": "...", "details": [...]}
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict

from campaign_portal.core.utils import to_naive_utc

DataT = TypeVar("DataT")

# Incoming datetimes may carry an offset; the database stores naive UTC.
NaiveUTCDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Envelope(BaseModel, Generic[DataT]):
    """Successful response wrapper."""

    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None
    pagination: Optional[PaginationMeta] = None


class ErrorEnvelope(BaseModel):
    """Error response wrapper produced by the exception handlers."""

    success: bool = False
    error: str
    details: Optional[list[Any]] = None
    error_id: Optional[int] = None
    error_type: Optional[str] = None


class ReadModel(BaseModel):
    """Base for schemas built from database entities."""

    model_config = ConfigDict(from_attributes=True)


class EntityRead(ReadModel):
    id: int
    created_at: datetime
    updated_at: datetime


class DeleteResult(BaseModel):
    id: int
    deleted: bool = True

"""
Base database models and utilities.

Every table entity derives from :class:`Base`; entities with audit columns
derive from :class:`TimestampedBase`. All timestamps are stored as naive UTC.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, NaiveDatetime
from sqlmodel import Field, SQLModel

from campaign_portal.core.utils import utc_now


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class TimestampedBase(Base):
    """Adds an integer primary key and created/updated audit columns."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=utc_now)
    updated_at: NaiveDatetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

"""SMS I/O models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class SmsSendRequest(BaseModel):
    phone: str = Field(min_length=1)
    message: str = Field(min_length=1, max_length=1000)


class SmsSendResult(BaseModel):
    to: str
    gateway_response: Optional[dict[str, Any]] = None

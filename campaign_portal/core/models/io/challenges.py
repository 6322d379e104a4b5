"""Challenge I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from campaign_portal.core.models.domain.enums import ChallengeStatus

from .common import EntityRead, NaiveUTCDatetime

MAX_DESCRIPTION_LENGTH = 500
MAX_SUBMISSION_FILES = 5


class ChallengeBase(BaseModel):
    title_en: str = Field(min_length=1)
    title_bn: str = Field(min_length=1)
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    rules_en: Optional[str] = None
    rules_bn: Optional[str] = None
    prize_en: Optional[str] = None
    prize_bn: Optional[str] = None
    cover_image: Optional[str] = None
    status: ChallengeStatus = ChallengeStatus.draft


class ChallengeCreate(ChallengeBase):
    start_date: NaiveUTCDatetime
    end_date: NaiveUTCDatetime


class ChallengeUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    rules_en: Optional[str] = None
    rules_bn: Optional[str] = None
    prize_en: Optional[str] = None
    prize_bn: Optional[str] = None
    cover_image: Optional[str] = None
    status: Optional[ChallengeStatus] = None
    start_date: Optional[NaiveUTCDatetime] = None
    end_date: Optional[NaiveUTCDatetime] = None


class ChallengeRead(ChallengeBase, EntityRead):
    start_date: datetime
    end_date: datetime
    computed_status: str = Field(default="", description="upcoming, active or ended for active challenges")
    submission_count: Optional[int] = None


class ChallengeSubmit(BaseModel):
    challenge_id: int
    name: Optional[str] = None
    mobile: str = Field(min_length=1)
    description: str
    files: list[str] = Field(default_factory=list)

    @field_validator("description")
    @classmethod
    def _description_length(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        if len(value) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less")
        return value

    @field_validator("files")
    @classmethod
    def _file_count(cls, value: list[str]) -> list[str]:
        if len(value) > MAX_SUBMISSION_FILES:
            raise ValueError(f"Maximum {MAX_SUBMISSION_FILES} files allowed")
        return value


class ChallengeSubmissionRead(EntityRead):
    challenge_id: int
    name: Optional[str] = None
    mobile: str
    description: str
    files: list[str]
    is_winner: bool


class ChallengeWinner(BaseModel):
    """Public view of a winning submission (no contact details)."""

    model_config = {"from_attributes": True}

    id: int
    name: Optional[str] = None
    description: str
    files: list[str]


class ChallengeDetail(ChallengeRead):
    winners: list[ChallengeWinner] = Field(default_factory=list)

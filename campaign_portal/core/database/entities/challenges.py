"""Community challenges and their public submissions."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON, Text
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import ChallengeStatus

from ..base import TimestampedBase


class Challenge(TimestampedBase, table=True):
    """Table: challenges"""

    __tablename__ = "challenges"
    __table_args__ = ({"extend_existing": True},)

    title_en: str
    title_bn: str
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    description_bn: Optional[str] = Field(default=None, sa_type=Text)
    rules_en: Optional[str] = Field(default=None, sa_type=Text)
    rules_bn: Optional[str] = Field(default=None, sa_type=Text)
    prize_en: Optional[str] = None
    prize_bn: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: NaiveDatetime
    end_date: NaiveDatetime
    status: ChallengeStatus = Field(default=ChallengeStatus.draft, index=True)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")


class ChallengeSubmission(TimestampedBase, table=True):
    """Table: challenge_submissions"""

    __tablename__ = "challenge_submissions"
    __table_args__ = ({"extend_existing": True},)

    challenge_id: int = Field(foreign_key="challenges.id", ondelete="CASCADE", index=True)
    name: Optional[str] = None
    mobile: str
    description: str = Field(sa_type=Text)
    files: list[str] = Field(default_factory=list, sa_type=JSON)
    is_winner: bool = Field(default=False)

"""Ask-Me-Anything questions, categories and per-IP votes."""

from __future__ import annotations

from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field

from campaign_portal.core.models.domain.enums import AmaStatus, VoteTarget, VoteType

from ..base import TimestampedBase


class AmaCategory(TimestampedBase, table=True):
    """Table: ama_categories"""

    __tablename__ = "ama_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str
    name_bn: str
    slug: str = Field(unique=True, index=True)
    icon: Optional[str] = None
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class AmaQuestion(TimestampedBase, table=True):
    """Table: ama_questions"""

    __tablename__ = "ama_questions"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[int] = Field(default=None, foreign_key="ama_categories.id", ondelete="SET NULL")
    question_en: str = Field(sa_type=Text)
    question_bn: Optional[str] = Field(default=None, sa_type=Text)
    answer_en: Optional[str] = Field(default=None, sa_type=Text)
    answer_bn: Optional[str] = Field(default=None, sa_type=Text)
    submitter_name: Optional[str] = None
    submitter_email: Optional[str] = None
    submitter_phone: Optional[str] = None
    submitter_ip: Optional[str] = None
    is_anonymous: bool = Field(default=False)
    status: AmaStatus = Field(default=AmaStatus.pending, index=True)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    answer_upvotes: int = Field(default=0, ge=0)
    answer_downvotes: int = Field(default=0, ge=0)
    is_featured: bool = Field(default=False)
    answered_at: Optional[NaiveDatetime] = None
    answered_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")


class AmaVote(TimestampedBase, table=True):
    """One vote per (question, target, voter IP).

    Table: ama_votes
    """

    __tablename__ = "ama_votes"
    __table_args__ = (
        UniqueConstraint("question_id", "vote_target", "voter_ip", name="uq_ama_vote_per_ip"),
        {"extend_existing": True},
    )

    question_id: int = Field(foreign_key="ama_questions.id", ondelete="CASCADE", index=True)
    voter_ip: str = Field(index=True)
    vote_type: VoteType
    vote_target: VoteTarget = Field(default=VoteTarget.question)

"""AMA (Ask Me Anything) I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from campaign_portal.core.models.domain.enums import AmaStatus, VoteTarget, VoteType

from .common import EntityRead

MAX_QUESTION_LENGTH = 2000


class AmaCategoryCreate(BaseModel):
    name_en: str = Field(min_length=1)
    name_bn: str = Field(min_length=1)
    slug: Optional[str] = None
    icon: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class AmaCategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class AmaCategoryRead(EntityRead):
    name_en: str
    name_bn: str
    slug: str
    icon: Optional[str] = None
    display_order: int
    is_active: bool


class AmaQuestionSubmit(BaseModel):
    category_id: Optional[int] = None
    question_en: str = Field(min_length=1, max_length=MAX_QUESTION_LENGTH)
    question_bn: Optional[str] = Field(default=None, max_length=MAX_QUESTION_LENGTH)
    submitter_name: Optional[str] = None
    submitter_email: Optional[EmailStr] = None
    submitter_phone: Optional[str] = None
    is_anonymous: bool = False

    @model_validator(mode="after")
    def _name_unless_anonymous(self) -> "AmaQuestionSubmit":
        if not self.is_anonymous and not (self.submitter_name or "").strip():
            raise ValueError("Name is required unless submitting anonymously")
        return self


class AmaQuestionPublic(EntityRead):
    category_id: Optional[int] = None
    question_en: str
    question_bn: Optional[str] = None
    answer_en: Optional[str] = None
    answer_bn: Optional[str] = None
    submitter_name: Optional[str] = None
    is_anonymous: bool
    status: AmaStatus
    upvotes: int
    downvotes: int
    answer_upvotes: int
    answer_downvotes: int
    is_featured: bool
    answered_at: Optional[datetime] = None
    category: Optional[AmaCategoryRead] = None
    user_vote: Optional[VoteType] = None
    user_answer_vote: Optional[VoteType] = None


class AmaQuestionRead(AmaQuestionPublic):
    """Console view including submitter contact details."""

    submitter_email: Optional[str] = None
    submitter_phone: Optional[str] = None
    submitter_ip: Optional[str] = None
    answered_by: Optional[int] = None


class AmaQuestionModerate(BaseModel):
    category_id: Optional[int] = None
    question_en: Optional[str] = None
    question_bn: Optional[str] = None
    answer_en: Optional[str] = None
    answer_bn: Optional[str] = None
    status: Optional[AmaStatus] = None
    is_featured: Optional[bool] = None


class AmaVoteRequest(BaseModel):
    question_id: int
    vote_type: VoteType
    vote_target: VoteTarget = VoteTarget.question


class AmaVoteResult(BaseModel):
    action: str = Field(description="added, removed or changed")
    vote_target: VoteTarget
    user_vote: Optional[VoteType] = None
    upvotes: int
    downvotes: int

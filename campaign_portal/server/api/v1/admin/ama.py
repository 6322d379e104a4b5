"""
Console AMA Moderation.

Approve, reject, answer and feature submitted questions. Saving an answer
marks the question as answered and records who answered it.
"""

from typing import Optional

from fastapi import APIRouter
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import AmaCategory, AmaQuestion, AmaVote
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import AmaStatus
from campaign_portal.core.models.io.ama import (
    AmaCategoryCreate,
    AmaCategoryRead,
    AmaCategoryUpdate,
    AmaQuestionModerate,
    AmaQuestionRead,
)
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.content import changes, ensure_exists, get_or_404, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

from .taxonomy import category_router

logger = get_logger(__name__)
router = APIRouter()
categories_router = category_router(AmaCategory, AmaCategoryCreate, AmaCategoryUpdate, AmaCategoryRead, "AMA category")


async def _reads(session, rows: list) -> list[AmaQuestionRead]:
    return await with_categories(session, rows, AmaQuestionRead, AmaCategory, AmaCategoryRead)


@router.get("", summary="List Questions", description="Every question, newest first.")
async def list_questions(
    session: SessionDep,
    page: PageDep,
    status: Optional[AmaStatus] = None,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
):
    stmt = select(AmaQuestion)
    if status is not None:
        stmt = stmt.where(AmaQuestion.status == status)
    if category_id is not None:
        stmt = stmt.where(AmaQuestion.category_id == category_id)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(AmaQuestion.question_en.ilike(pattern), AmaQuestion.question_bn.ilike(pattern)))
    stmt = stmt.order_by(AmaQuestion.created_at.desc(), AmaQuestion.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await _reads(session, rows), total, page)


@router.get("/{question_id}", summary="Get Question")
async def get_question(question_id: int, session: SessionDep):
    question = await get_or_404(session, AmaQuestion, question_id, "Question")
    return ok((await _reads(session, [question]))[0])


@router.patch(
    "/{question_id}",
    summary="Moderate Question",
    description="Edit, approve, reject or answer a question. A new answer sets the status to answered.",
)
async def moderate_question(question_id: int, moderation: AmaQuestionModerate, session: SessionDep, user: StaffUser):
    question = await get_or_404(session, AmaQuestion, question_id, "Question")
    data = changes(moderation, "question_en", "status", "is_featured")
    if "category_id" in data:
        await ensure_exists(session, AmaCategory, data["category_id"], "AMA category")

    answered = any(data.get(field) for field in ("answer_en", "answer_bn"))
    if answered or data.get("status") == AmaStatus.answered:
        data["status"] = AmaStatus.answered
        data["answered_at"] = utc_now()
        data["answered_by"] = user.id
        logger.info(f"AMA question {question.id} answered by user {user.id}")

    question = await AsyncRepository(session, AmaQuestion).update(question, data)
    return ok((await _reads(session, [question]))[0], message="Question updated")


@router.delete("/{question_id}", summary="Delete Question", description="Deletes the question and its votes.")
async def delete_question(question_id: int, session: SessionDep):
    question = await get_or_404(session, AmaQuestion, question_id, "Question")
    votes = await session.execute(select(AmaVote).where(AmaVote.question_id == question.id))
    for vote in votes.scalars().all():
        await session.delete(vote)
    await AsyncRepository(session, AmaQuestion).delete(question)
    return ok(DeleteResult(id=question_id), message="Question deleted")

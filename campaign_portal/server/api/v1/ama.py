"""
Ask-Me-Anything Endpoints.

Public questions (approved or answered), question submission and per-IP
voting on questions and answers.

Voting toggles: repeating the same vote removes it, the opposite vote
replaces it, otherwise the vote is added. Counters never go below zero.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Request, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import AmaCategory, AmaQuestion, AmaVote
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import AmaStatus, VoteTarget, VoteType
from campaign_portal.core.models.io.ama import (
    AmaCategoryRead,
    AmaQuestionPublic,
    AmaQuestionSubmit,
    AmaVoteRequest,
    AmaVoteResult,
)
from campaign_portal.core.utils import client_ip
from campaign_portal.server.services.content import bad_request, not_found, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()

PUBLIC_STATUSES = (AmaStatus.approved, AmaStatus.answered)

_COUNTERS = {
    (VoteTarget.question, VoteType.upvote): "upvotes",
    (VoteTarget.question, VoteType.downvote): "downvotes",
    (VoteTarget.answer, VoteType.upvote): "answer_upvotes",
    (VoteTarget.answer, VoteType.downvote): "answer_downvotes",
}


def _adjust(question: AmaQuestion, target: VoteTarget, vote_type: VoteType, delta: int) -> None:
    field = _COUNTERS[(target, vote_type)]
    setattr(question, field, max(0, getattr(question, field) + delta))


async def public_questions(session, questions: list, voter_ip: Optional[str]) -> list[AmaQuestionPublic]:
    """Public read models: anonymous names hidden, the caller's votes filled in."""
    items = await with_categories(session, questions, AmaQuestionPublic, AmaCategory, AmaCategoryRead)
    votes = {}
    if voter_ip and questions:
        result = await session.execute(
            select(AmaVote).where(
                AmaVote.voter_ip == voter_ip, AmaVote.question_id.in_([q.id for q in questions])
            )
        )
        votes = {(v.question_id, v.vote_target): v.vote_type for v in result.scalars().all()}
    for item in items:
        if item.is_anonymous:
            item.submitter_name = None
        item.user_vote = votes.get((item.id, VoteTarget.question))
        item.user_answer_vote = votes.get((item.id, VoteTarget.answer))
    return items


@router.get(
    "/categories",
    summary="List AMA Categories",
    description="Active AMA categories in display order.",
    response_description="List of categories.",
)
async def list_ama_categories(session: SessionDep):
    result = await session.execute(
        select(AmaCategory)
        .where(AmaCategory.is_active == True)  # noqa: E712
        .order_by(AmaCategory.display_order, AmaCategory.id)
    )
    return ok([AmaCategoryRead.model_validate(c) for c in result.scalars().all()])


@router.get(
    "/questions",
    summary="List Questions",
    description="Approved and answered questions with the caller's own votes.",
    response_description="A page of questions.",
)
async def list_questions(
    request: Request,
    session: SessionDep,
    page: PageDep,
    category: Optional[str] = None,
    status: Optional[Literal["answered", "pending"]] = None,
    search: Optional[str] = None,
    sort: Literal["recent", "popular"] = "recent",
):
    """
    List public questions.

    - **category**: AMA category slug
    - **status**: ``answered`` or ``pending`` (approved but not yet answered)
    - **search**: Case-insensitive match on the question text
    - **sort**: ``recent`` (default) or ``popular`` (most upvoted first)
    """
    stmt = select(AmaQuestion)
    if status == "answered":
        stmt = stmt.where(AmaQuestion.status == AmaStatus.answered)
    elif status == "pending":
        stmt = stmt.where(AmaQuestion.status == AmaStatus.approved)
    else:
        stmt = stmt.where(AmaQuestion.status.in_(PUBLIC_STATUSES))
    if category:
        stmt = stmt.join(AmaCategory, AmaCategory.id == AmaQuestion.category_id).where(AmaCategory.slug == category)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(AmaQuestion.question_en.ilike(pattern), AmaQuestion.question_bn.ilike(pattern)))
    if sort == "popular":
        stmt = stmt.order_by(AmaQuestion.upvotes.desc(), AmaQuestion.created_at.desc())
    else:
        stmt = stmt.order_by(AmaQuestion.is_featured.desc(), AmaQuestion.created_at.desc())

    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await public_questions(session, rows, client_ip(request)), total, page)


@router.get(
    "/questions/{question_id}",
    summary="Get Question",
    description="One approved or answered question.",
    response_description="The question.",
    responses={404: {"description": "Question not found"}},
)
async def get_question(question_id: int, request: Request, session: SessionDep):
    question = await session.get(AmaQuestion, question_id)
    if question is None or question.status not in PUBLIC_STATUSES:
        raise not_found("Question")
    items = await public_questions(session, [question], client_ip(request))
    return ok(items[0])


@router.post(
    "/questions",
    status_code=status.HTTP_201_CREATED,
    summary="Submit Question",
    description="Submit a question for moderation.",
    response_description="The stored question (pending).",
)
async def submit_question(submission: AmaQuestionSubmit, request: Request, session: SessionDep):
    """
    Submit a question.

    - **question_en**: Question text, at most 2000 characters (required)
    - **submitter_name**: Required unless **is_anonymous** is true
    """
    if submission.category_id is not None and await session.get(AmaCategory, submission.category_id) is None:
        raise bad_request("Unknown AMA category")

    question = AmaQuestion(
        **submission.model_dump(),
        submitter_ip=client_ip(request),
        status=AmaStatus.pending,
    )
    session.add(question)
    await session.commit()
    await session.refresh(question)
    logger.info(f"AMA question {question.id} submitted")
    items = await public_questions(session, [question], None)
    return ok(items[0], message="Your question has been submitted and will appear once approved.")


@router.post(
    "/vote",
    summary="Vote",
    description="Toggle an up or down vote on a question or its answer.",
    response_description="The vote outcome and the new counters.",
    responses={
        400: {"description": "Voter cannot be identified or the question has no answer"},
        404: {"description": "Question not found"},
    },
)
async def vote(vote_in: AmaVoteRequest, request: Request, session: SessionDep):
    """
    Vote on a question or answer.

    - **question_id**: Question to vote on
    - **vote_type**: ``upvote`` or ``downvote``
    - **vote_target**: ``question`` (default) or ``answer``

    One vote per target and IP address.
    """
    voter_ip = client_ip(request)
    if not voter_ip:
        raise bad_request("Unable to identify voter")

    question = await session.get(AmaQuestion, vote_in.question_id)
    if question is None or question.status not in PUBLIC_STATUSES:
        raise not_found("Question")
    target = vote_in.vote_target
    if target == VoteTarget.answer and not (question.answer_en or question.answer_bn):
        raise bad_request("This question has not been answered yet")

    result = await session.execute(
        select(AmaVote).where(
            AmaVote.question_id == question.id,
            AmaVote.vote_target == target,
            AmaVote.voter_ip == voter_ip,
        )
    )
    existing = result.scalars().first()

    if existing is not None and existing.vote_type == vote_in.vote_type:
        _adjust(question, target, existing.vote_type, -1)
        await session.delete(existing)
        action, user_vote = "removed", None
    elif existing is not None:
        _adjust(question, target, existing.vote_type, -1)
        _adjust(question, target, vote_in.vote_type, 1)
        existing.vote_type = vote_in.vote_type
        session.add(existing)
        action, user_vote = "changed", vote_in.vote_type
    else:
        _adjust(question, target, vote_in.vote_type, 1)
        session.add(AmaVote(question_id=question.id, voter_ip=voter_ip, vote_type=vote_in.vote_type, vote_target=target))
        action, user_vote = "added", vote_in.vote_type

    session.add(question)
    await session.commit()
    await session.refresh(question)

    if target == VoteTarget.question:
        upvotes, downvotes = question.upvotes, question.downvotes
    else:
        upvotes, downvotes = question.answer_upvotes, question.answer_downvotes
    return ok(AmaVoteResult(action=action, vote_target=target, user_vote=user_vote, upvotes=upvotes, downvotes=downvotes))

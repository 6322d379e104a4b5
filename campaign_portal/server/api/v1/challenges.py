"""
Challenge Endpoints.

Community challenges run within a start/end window. An ``active`` challenge
is shown as ``upcoming`` before its window opens and ``ended`` after it
closes; only a challenge inside its window accepts submissions.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import Challenge, ChallengeSubmission
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ChallengeStatus
from campaign_portal.core.models.io.challenges import (
    ChallengeDetail,
    ChallengeRead,
    ChallengeSubmissionRead,
    ChallengeSubmit,
    ChallengeWinner,
)
from campaign_portal.core.utils import utc_now
from campaign_portal.server.services.content import bad_request, not_found, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
router = APIRouter()


def computed_status(challenge: Challenge, now: Optional[datetime] = None) -> str:
    """Stored status, refined to upcoming/active/ended for active challenges."""
    if challenge.status != ChallengeStatus.active:
        return challenge.status.value
    now = now or utc_now()
    if now < challenge.start_date:
        return "upcoming"
    if now > challenge.end_date:
        return "ended"
    return "active"


def challenge_read(challenge: Challenge, now: Optional[datetime] = None, model=ChallengeRead):
    item = model.model_validate(challenge)
    item.computed_status = computed_status(challenge, now)
    return item


@router.get(
    "",
    summary="List Challenges",
    description="Non-archived challenges, newest first, with their computed status.",
    response_description="A page of challenges.",
)
async def list_challenges(session: SessionDep, page: PageDep, status: Optional[str] = None):
    """
    List challenges.

    - **status**: Computed status to keep (``upcoming``, ``active``, ``ended``,
      ``draft``, ``closed``); ``all`` or omitted keeps everything
    """
    result = await session.execute(
        select(Challenge).where(Challenge.status != ChallengeStatus.archived).order_by(Challenge.created_at.desc())
    )
    now = utc_now()
    items = [challenge_read(c, now) for c in result.scalars().all()]
    if status and status != "all":
        items = [item for item in items if item.computed_status == status]
    return paged(items[page.offset : page.offset + page.limit], len(items), page)


@router.get(
    "/{challenge_id}",
    summary="Get Challenge",
    description="One challenge with its computed status and winners.",
    response_description="The challenge.",
    responses={404: {"description": "Challenge not found"}},
)
async def get_challenge(challenge_id: int, session: SessionDep):
    challenge = await session.get(Challenge, challenge_id)
    if challenge is None or challenge.status == ChallengeStatus.archived:
        raise not_found("Challenge")
    detail = challenge_read(challenge, model=ChallengeDetail)
    winners = await session.execute(
        select(ChallengeSubmission)
        .where(ChallengeSubmission.challenge_id == challenge.id, ChallengeSubmission.is_winner == True)  # noqa: E712
        .order_by(ChallengeSubmission.created_at)
    )
    detail.winners = [ChallengeWinner.model_validate(w) for w in winners.scalars().all()]
    return ok(detail)


@router.post(
    "/submit",
    status_code=status.HTTP_201_CREATED,
    summary="Submit Challenge Entry",
    description="Submit an entry to a challenge that is currently accepting submissions.",
    response_description="The stored submission.",
    responses={
        400: {"description": "Validation failed or the challenge is not accepting submissions"},
        404: {"description": "Challenge not found"},
    },
)
async def submit_entry(submission: ChallengeSubmit, session: SessionDep):
    """
    Submit a challenge entry.

    - **challenge_id**, **mobile**: Required
    - **description**: Required, at most 500 characters
    - **files**: Up to 5 URLs from the ``challenges`` upload scope
    """
    challenge = await session.get(Challenge, submission.challenge_id)
    if challenge is None:
        raise not_found("Challenge")
    if computed_status(challenge) != "active":
        raise bad_request("This challenge is not currently accepting submissions")

    entry = ChallengeSubmission(
        challenge_id=challenge.id,
        name=submission.name.strip() if submission.name and submission.name.strip() else None,
        mobile=submission.mobile.strip(),
        description=submission.description,
        files=submission.files,
    )
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    logger.info(f"Submission {entry.id} received for challenge {challenge.id}")
    return ok(ChallengeSubmissionRead.model_validate(entry))

"""
Console Challenge Management.

Challenges (including drafts and archived ones), their submissions and
winner selection.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import delete, func
from sqlmodel import select

from campaign_portal.core.database.entities import Challenge, ChallengeSubmission
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ChallengeStatus
from campaign_portal.core.models.io.challenges import (
    ChallengeCreate,
    ChallengeSubmissionRead,
    ChallengeUpdate,
)
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.utils import utc_now
from campaign_portal.server.api.v1.challenges import challenge_read
from campaign_portal.server.services.content import bad_request, changes, get_or_404, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

logger = get_logger(__name__)
router = APIRouter()


def _check_window(start, end) -> None:
    if end <= start:
        raise bad_request("end_date must be after start_date")


async def _submission_counts(session, ids: list) -> dict:
    if not ids:
        return {}
    result = await session.execute(
        select(ChallengeSubmission.challenge_id, func.count())
        .where(ChallengeSubmission.challenge_id.in_(ids))
        .group_by(ChallengeSubmission.challenge_id)
    )
    return dict(result.all())


async def _reads(session, challenges: list) -> list:
    now = utc_now()
    counts = await _submission_counts(session, [c.id for c in challenges])
    items = []
    for challenge in challenges:
        item = challenge_read(challenge, now)
        item.submission_count = counts.get(challenge.id, 0)
        items.append(item)
    return items


@router.get("", summary="List Challenges", description="Every challenge with its submission count.")
async def list_challenges(session: SessionDep, page: PageDep, status: Optional[ChallengeStatus] = None):
    stmt = select(Challenge)
    if status is not None:
        stmt = stmt.where(Challenge.status == status)
    stmt = stmt.order_by(Challenge.created_at.desc(), Challenge.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await _reads(session, rows), total, page)


@router.get("/{challenge_id}", summary="Get Challenge")
async def get_challenge(challenge_id: int, session: SessionDep):
    challenge = await get_or_404(session, Challenge, challenge_id, "Challenge")
    return ok((await _reads(session, [challenge]))[0])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Challenge")
async def create_challenge(challenge_in: ChallengeCreate, session: SessionDep, user: StaffUser):
    _check_window(challenge_in.start_date, challenge_in.end_date)
    challenge = await AsyncRepository(session, Challenge).create(
        Challenge(**challenge_in.model_dump(), created_by=user.id)
    )
    return ok((await _reads(session, [challenge]))[0], message="Challenge created")


@router.patch("/{challenge_id}", summary="Update Challenge")
async def update_challenge(challenge_id: int, challenge_in: ChallengeUpdate, session: SessionDep):
    challenge = await get_or_404(session, Challenge, challenge_id, "Challenge")
    data = changes(challenge_in, "title_en", "title_bn", "status", "start_date", "end_date")
    _check_window(data.get("start_date", challenge.start_date), data.get("end_date", challenge.end_date))
    challenge = await AsyncRepository(session, Challenge).update(challenge, data)
    return ok((await _reads(session, [challenge]))[0], message="Challenge updated")


@router.delete("/{challenge_id}", summary="Delete Challenge", description="Deletes the challenge and its submissions.")
async def delete_challenge(challenge_id: int, session: SessionDep):
    challenge = await get_or_404(session, Challenge, challenge_id, "Challenge")
    await session.execute(delete(ChallengeSubmission).where(ChallengeSubmission.challenge_id == challenge.id))
    await AsyncRepository(session, Challenge).delete(challenge)
    return ok(DeleteResult(id=challenge_id), message="Challenge deleted")


@router.get("/{challenge_id}/submissions", summary="List Submissions")
async def list_submissions(
    challenge_id: int, session: SessionDep, page: PageDep, is_winner: Optional[bool] = None
):
    await get_or_404(session, Challenge, challenge_id, "Challenge")
    stmt = select(ChallengeSubmission).where(ChallengeSubmission.challenge_id == challenge_id)
    if is_winner is not None:
        stmt = stmt.where(ChallengeSubmission.is_winner == is_winner)
    stmt = stmt.order_by(ChallengeSubmission.created_at.desc(), ChallengeSubmission.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([ChallengeSubmissionRead.model_validate(s) for s in rows], total, page)


@router.post(
    "/submissions/{submission_id}/winner",
    summary="Toggle Winner",
    description="Mark a submission as a winner, or unmark it when it already is one.",
)
async def toggle_winner(submission_id: int, session: SessionDep):
    submission = await get_or_404(session, ChallengeSubmission, submission_id, "Submission")
    submission = await AsyncRepository(session, ChallengeSubmission).update(
        submission, {"is_winner": not submission.is_winner}
    )
    logger.info(f"Submission {submission.id} winner={submission.is_winner}")
    return ok(ChallengeSubmissionRead.model_validate(submission), message="Submission updated")

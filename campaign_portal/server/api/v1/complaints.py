"""
Complaint Box Endpoints.

Citizens file complaints against a ward and follow them with the tracking id
they receive. Statistics per ward feed the public heat map.
"""

from collections import Counter, defaultdict

from fastapi import APIRouter, Query, status
from sqlalchemy import func
from sqlmodel import select

from campaign_portal.core.database.entities import Complaint
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ComplaintStatus
from campaign_portal.core.models.io.complaints import (
    ComplaintStats,
    ComplaintStatsSummary,
    ComplaintSubmit,
    ComplaintTracking,
    WardStats,
)
from campaign_portal.server.core.config import settings
from campaign_portal.server.services.content import bad_request, generate_tracking_id, not_found, ok
from campaign_portal.server.services.deps import SessionDep

logger = get_logger(__name__)
router = APIRouter()


def normalize_ward(ward: str) -> str:
    """``"1"`` and ``"01"`` name the same ward."""
    ward = ward.strip()
    return ward.zfill(2) if ward.isdigit() else ward


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="File Complaint",
    description="File a complaint for one of the constituency's wards.",
    response_description="The tracking id and current status.",
    responses={400: {"description": "Validation failed or unknown ward"}},
)
async def submit_complaint(submission: ComplaintSubmit, session: SessionDep):
    """
    File a complaint.

    - **ward**: One of the configured ward numbers
    - **category**, **subject**, **message**: Required
    - **name**, **email**: Required unless **is_anonymous** is true; anonymous
      complaints never store identity fields
    - **attachments**: URLs returned by the ``complaints`` upload scope
    """
    ward = normalize_ward(submission.ward)
    if ward not in {normalize_ward(w) for w in settings.complaint_wards}:
        raise bad_request("Invalid ward")

    data = submission.model_dump()
    data["ward"] = ward
    complaint = Complaint(**data, tracking_id=generate_tracking_id(), status=ComplaintStatus.pending)
    session.add(complaint)
    await session.commit()
    await session.refresh(complaint)
    logger.info(f"Complaint {complaint.tracking_id} filed for ward {ward}")
    return ok(
        ComplaintTracking.model_validate(complaint),
        message=f"Complaint submitted. Your tracking id is {complaint.tracking_id}",
    )


@router.get(
    "",
    summary="Track Complaint",
    description="Look up a complaint by tracking id (case-insensitive).",
    response_description="Public status of the complaint.",
    responses={404: {"description": "Complaint not found"}},
)
async def track_complaint(session: SessionDep, tracking_id: str = Query(min_length=1)):
    result = await session.execute(
        select(Complaint).where(func.upper(Complaint.tracking_id) == tracking_id.strip().upper())
    )
    complaint = result.scalars().first()
    if complaint is None:
        raise not_found("Complaint")
    return ok(ComplaintTracking.model_validate(complaint))


@router.get(
    "/stats",
    summary="Complaint Statistics",
    description="Complaint counts per ward and status with a heat-map intensity.",
    response_description="Per-ward statistics and an overall summary.",
)
async def complaint_stats(session: SessionDep):
    result = await session.execute(
        select(Complaint.ward, Complaint.status, func.count()).group_by(Complaint.ward, Complaint.status)
    )
    counts: dict[str, Counter] = defaultdict(Counter)
    for ward, complaint_status, count in result.all():
        counts[normalize_ward(ward)][ComplaintStatus(complaint_status).value] += count

    wards = [normalize_ward(w) for w in settings.complaint_wards]
    wards += sorted(w for w in counts if w not in wards)
    totals = {ward: sum(counts[ward].values()) for ward in wards}
    busiest = max(totals.values(), default=0)

    ward_stats = [
        WardStats(
            ward=ward,
            total=totals[ward],
            intensity=round(totals[ward] / busiest, 2) if busiest else 0.0,
            **{s.value: counts[ward][s.value] for s in ComplaintStatus},
        )
        for ward in wards
    ]

    total = sum(totals.values())
    resolved = sum(c[ComplaintStatus.resolved.value] for c in counts.values())
    pending = sum(c[ComplaintStatus.pending.value] for c in counts.values())
    most_active = max(wards, key=lambda w: totals[w]) if busiest else None
    summary = ComplaintStatsSummary(
        total=total,
        resolved=resolved,
        pending=pending,
        resolution_rate=round(resolved / total * 100) if total else 0,
        most_active_ward=most_active,
    )
    return ok(ComplaintStats(wards=ward_stats, summary=summary))

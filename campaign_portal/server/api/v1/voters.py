"""
Voter Lookup Endpoints.

Citizens find their entry on the electoral roll by ward and date of birth.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query
from sqlmodel import select

from campaign_portal.core.database.entities import Voter, VoterMetadata
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.models.io.voters import VoterMetadataRead, VoterRead, VoterSearchResult, WardOption
from campaign_portal.server.services.content import load_by_ids, ok
from campaign_portal.server.services.deps import SessionDep

router = APIRouter()

MAX_SEARCH_RESULTS = 100


async def voter_reads(session, voters: list) -> list[VoterRead]:
    """Read models with their voter area attached."""
    areas = await load_by_ids(session, VoterMetadata, (v.voter_metadata_id for v in voters))
    items = []
    for voter in voters:
        item = VoterRead.model_validate(voter)
        area = areas.get(voter.voter_metadata_id)
        item.voter_metadata = VoterMetadataRead.model_validate(area) if area is not None else None
        items.append(item)
    return items


@router.get(
    "/search",
    summary="Search Voters",
    description="Find voters of one ward by date of birth, optionally narrowed by name and area number.",
    response_description="Matching voters (at most 100) and the total match count.",
)
async def search_voters(
    session: SessionDep,
    date_of_birth: date = Query(description="Date of birth, YYYY-MM-DD"),
    ward_id: int = Query(description="Voter area (metadata) id from /voters/wards"),
    voter_name: Optional[str] = Query(default=None, description="Case-insensitive part of the name"),
    area_id: Optional[str] = Query(default=None, description="Voter area number"),
):
    """
    Search the voter list.

    - **date_of_birth**, **ward_id**: Required
    - **voter_name**: Optional partial name
    - **area_id**: Optional voter area number of the ward
    """
    stmt = select(Voter).where(Voter.voter_metadata_id == ward_id, Voter.date_of_birth == date_of_birth)
    if voter_name and voter_name.strip():
        stmt = stmt.where(Voter.voter_name.ilike(f"%{voter_name.strip()}%"))
    if area_id:
        stmt = stmt.join(VoterMetadata, VoterMetadata.id == Voter.voter_metadata_id).where(
            VoterMetadata.voter_area_no == area_id
        )
    stmt = stmt.order_by(Voter.serial_no)

    rows, total = await fetch_page(session, stmt, MAX_SEARCH_RESULTS, 0)
    return ok(VoterSearchResult(voters=await voter_reads(session, rows), total=total))


@router.get(
    "/wards",
    summary="List Voter Areas",
    description="Every voter area of the roll, by area number.",
    response_description="List of voter areas.",
)
async def list_wards(session: SessionDep):
    result = await session.execute(select(VoterMetadata).order_by(VoterMetadata.voter_area_no))
    return ok([WardOption.model_validate(m) for m in result.scalars().all()])

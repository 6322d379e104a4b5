"""
Console Voter Roll Management.

Voter areas (``voter_metadata``) and the voter rows imported under them.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import delete, or_
from sqlmodel import select

from campaign_portal.core.database.entities import Voter, VoterMetadata
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.voters import (
    VoterImport,
    VoterImportResult,
    VoterMetadataRead,
    VoterMetadataUpdate,
    VoterMetadataWrite,
)
from campaign_portal.server.api.v1.voters import voter_reads
from campaign_portal.server.services.content import bad_request, changes, get_or_404, load_by_ids, ok, paged
from campaign_portal.server.services.deps import PageDep, SessionDep

logger = get_logger(__name__)
voters_router = APIRouter()
metadata_router = APIRouter()


@voters_router.get("", summary="List Voters")
async def list_voters(
    session: SessionDep,
    page: PageDep,
    voter_metadata_id: Optional[int] = None,
    search: Optional[str] = None,
    voter_no: Optional[str] = None,
):
    """
    List voters in roll order.

    - **voter_metadata_id**: Restrict to one voter area
    - **search**: Matches voter, father or mother name
    """
    stmt = select(Voter)
    if voter_metadata_id is not None:
        stmt = stmt.where(Voter.voter_metadata_id == voter_metadata_id)
    if voter_no:
        stmt = stmt.where(Voter.voter_no == voter_no.strip())
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(Voter.voter_name.ilike(pattern), Voter.father_name.ilike(pattern), Voter.mother_name.ilike(pattern))
        )
    stmt = stmt.order_by(Voter.voter_metadata_id, Voter.serial_no)
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await voter_reads(session, rows), total, page)


@voters_router.post(
    "/import",
    status_code=status.HTTP_201_CREATED,
    summary="Import Voters",
    description="Bulk insert voter rows; every referenced voter area must exist.",
    responses={400: {"description": "Unknown voter area"}},
)
async def import_voters(payload: VoterImport, session: SessionDep):
    area_ids = {v.voter_metadata_id for v in payload.voters}
    known = await load_by_ids(session, VoterMetadata, area_ids)
    missing = sorted(area_ids - set(known))
    if missing:
        raise bad_request(f"Unknown voter area: {', '.join(str(i) for i in missing)}")

    session.add_all([Voter(**v.model_dump()) for v in payload.voters])
    await session.commit()
    logger.info(f"Imported {len(payload.voters)} voters into {len(area_ids)} area(s)")
    return ok(VoterImportResult(inserted=len(payload.voters)), message="Voters imported")


@voters_router.delete("/{voter_id}", summary="Delete Voter")
async def delete_voter(voter_id: int, session: SessionDep):
    voter = await get_or_404(session, Voter, voter_id, "Voter")
    await AsyncRepository(session, Voter).delete(voter)
    return ok(DeleteResult(id=voter_id), message="Voter deleted")


@metadata_router.get("", summary="List Voter Areas")
async def list_metadata(session: SessionDep, page: PageDep):
    stmt = select(VoterMetadata).order_by(VoterMetadata.voter_area_no, VoterMetadata.id)
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([VoterMetadataRead.model_validate(m) for m in rows], total, page)


@metadata_router.get("/{metadata_id}", summary="Get Voter Area")
async def get_metadata(metadata_id: int, session: SessionDep):
    return ok(VoterMetadataRead.model_validate(await get_or_404(session, VoterMetadata, metadata_id, "Voter area")))


@metadata_router.post("", status_code=status.HTTP_201_CREATED, summary="Create Voter Area")
async def create_metadata(metadata_in: VoterMetadataWrite, session: SessionDep):
    metadata = await AsyncRepository(session, VoterMetadata).create(VoterMetadata(**metadata_in.model_dump()))
    return ok(VoterMetadataRead.model_validate(metadata), message="Voter area created")


@metadata_router.patch("/{metadata_id}", summary="Update Voter Area")
async def update_metadata(metadata_id: int, metadata_in: VoterMetadataUpdate, session: SessionDep):
    metadata = await get_or_404(session, VoterMetadata, metadata_id, "Voter area")
    data = changes(metadata_in, "voter_area_name", "voter_area_no")
    metadata = await AsyncRepository(session, VoterMetadata).update(metadata, data)
    return ok(VoterMetadataRead.model_validate(metadata), message="Voter area updated")


@metadata_router.delete("/{metadata_id}", summary="Delete Voter Area", description="Deletes the area and its voters.")
async def delete_metadata(metadata_id: int, session: SessionDep):
    metadata = await get_or_404(session, VoterMetadata, metadata_id, "Voter area")
    await session.execute(delete(Voter).where(Voter.voter_metadata_id == metadata.id))
    await AsyncRepository(session, VoterMetadata).delete(metadata)
    return ok(DeleteResult(id=metadata_id), message="Voter area deleted")

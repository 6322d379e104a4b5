"""
Upload Endpoints.

Every upload surface shares these routes under ``/uploads/{scope}``; the
scope (``media``, ``emergency``, ``volunteer``, ``testimonials``,
``challenges``, ``complaints``) decides accepted types, size limits, who may
upload and where objects land in the bucket.

Three flows are offered:

- single-shot: ``POST /uploads/{scope}`` with form field ``files``
- chunked: ``POST /uploads/{scope}/chunk`` per piece, then ``POST .../complete``
- multipart: ``POST .../multipart/initiate``, PUT the parts to the presigned
  URLs, then ``POST .../multipart/complete`` (or ``.../abort``)

Files uploaded to the ``media`` scope are also recorded in the media library.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from campaign_portal.core.database.entities import MediaItem
from campaign_portal.core.database.entities.users import User
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.io.media import (
    ChunkComplete,
    MediaItemRead,
    MultipartAbort,
    MultipartComplete,
    MultipartInitiate,
    MultipartPartQuery,
    StoredFile,
    UploadResult,
    UploadScopeInfo,
)
from campaign_portal.server.core import constant
from campaign_portal.server.core.config import settings
from campaign_portal.server.services.content import ok
from campaign_portal.server.services.deps import PipelineDep, ProfileDep, SessionDep, UploaderDep
from campaign_portal.server.services.upload_pipeline import UploadPipeline
from campaign_portal.server.services.upload_profiles import UploadProfile, UploadRejected

logger = get_logger(__name__)
router = APIRouter()

_GENERIC_TYPES = {"", "application/octet-stream"}


async def record_media(session, stored: StoredFile, uploader: Optional[User]) -> MediaItemRead:
    """Insert the media library row for a stored file."""
    item = MediaItem(
        filename=stored.filename,
        original_filename=stored.original_filename,
        file_type=stored.file_type,
        mime_type=stored.mime_type,
        file_size=stored.size,
        s3_key=stored.key,
        s3_url=stored.s3_url,
        cloudfront_url=stored.url,
        uploaded_by=uploader.id if uploader else None,
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)
    return MediaItemRead.model_validate(item)


async def _record_or_discard(
    session, pipeline: UploadPipeline, profile: UploadProfile, stored: StoredFile, uploader: Optional[User]
) -> StoredFile:
    """Record a single-shot/chunked upload; the object is deleted again when that fails."""
    if not profile.record_media:
        return stored
    try:
        stored.media_item = await record_media(session, stored, uploader)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to record {stored.key} in the media library: {e}", exc_info=True)
        await pipeline.discard(stored)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record the file in the media library",
        )
    return stored


@router.get(
    "/{scope}/config",
    summary="Upload Scope Configuration",
    description="Accepted types, size limits and chunking parameters of an upload scope.",
    response_description="Scope configuration.",
    responses={404: {"description": "Unknown upload scope"}},
)
async def scope_config(profile: ProfileDep):
    info = UploadScopeInfo(
        scope=profile.scope,
        staff_only=profile.staff_only,
        accepted_types=profile.accepted_types,
        max_sizes={kind.value: size for kind, size in profile.max_sizes.items()},
        min_part_size=constant.MIN_MULTIPART_PART_SIZE,
        chunk_ttl_seconds=settings.uploads.chunk_ttl_seconds,
        extra={"max_files": profile.max_files, "storage_configured": not settings.aws.missing()},
    )
    return ok(info)


@router.post(
    "/{scope}",
    summary="Upload Files",
    description="Upload one or more complete files in a multipart form (field ``files``).",
    response_description="Per-file results.",
    responses={
        400: {"description": "No files, too many files, or every file was rejected"},
        401: {"description": "Authentication required (staff-only scopes)"},
        403: {"description": "Insufficient permissions (staff-only scopes)"},
        404: {"description": "Unknown upload scope"},
        500: {"description": "Storage not configured or failed"},
    },
)
async def upload_files(
    profile: ProfileDep,
    session: SessionDep,
    uploader: UploaderDep,
    pipeline: PipelineDep,
    files: Optional[List[UploadFile]] = File(default=None),
):
    """
    Upload files in one request.

    Each file is validated on its own; rejected files are reported in the
    results while the others are still stored. The request fails with 400
    only when no file could be stored.
    """
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files provided")
    if len(files) > profile.max_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum {profile.max_files} files allowed per upload",
        )

    results: List[UploadResult] = []
    for upload in files:
        name = upload.filename or "file"
        content_type = upload.content_type if upload.content_type not in _GENERIC_TYPES else None
        data = await upload.read()
        try:
            stored = await pipeline.store(profile, name, content_type, data)
        except UploadRejected as e:
            results.append(UploadResult(filename=name, success=False, error=str(e)))
            continue
        stored = await _record_or_discard(session, pipeline, profile, stored, uploader)
        results.append(UploadResult(filename=name, success=True, file=stored))

    uploaded = sum(1 for r in results if r.success)
    if uploaded == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": results[0].error, "results": [r.model_dump(mode="json") for r in results]},
        )
    return ok(
        {"files": results, "uploaded": uploaded, "failed": len(results) - uploaded},
        message=f"{uploaded} file(s) uploaded",
    )


@router.post(
    "/{scope}/chunk",
    summary="Upload Chunk",
    description="Send one chunk of a file; the upload is created on its first chunk.",
    response_description="How many chunks have arrived.",
    responses={400: {"description": "Chunk does not fit the upload or the file is not accepted"}},
)
async def upload_chunk(
    profile: ProfileDep,
    uploader: UploaderDep,
    pipeline: PipelineDep,
    chunk: UploadFile = File(description="Chunk bytes"),
    upload_id: str = Form(min_length=1, max_length=200),
    chunk_index: int = Form(ge=0),
    total_chunks: int = Form(ge=1, le=constant.MAX_CHUNKS),
    filename: str = Form(min_length=1),
    file_type: Optional[str] = Form(default=None),
    file_size: Optional[int] = Form(default=None, ge=0),
):
    """
    Upload one chunk.

    - **upload_id**: Client-generated id shared by every chunk of the file
    - **chunk_index**: 0-based position of this chunk
    - **total_chunks**: Number of chunks, identical on every request
    - **filename**, **file_type**, **file_size**: Describe the whole file

    Chunks expire when the upload stays idle longer than the chunk TTL.
    """
    data = await chunk.read()
    receipt = pipeline.receive_chunk(
        profile,
        upload_id,
        chunk_index,
        total_chunks,
        data,
        filename=filename,
        file_type=file_type,
        file_size=file_size,
        owner=uploader.id if uploader else None,
    )
    return ok(receipt)


@router.get(
    "/{scope}/chunk",
    summary="Chunked Upload Status",
    description="Received and missing chunks of an upload, for resuming.",
    response_description="Upload progress.",
    responses={404: {"description": "Upload not found or expired"}},
)
async def chunk_status(
    profile: ProfileDep,
    uploader: UploaderDep,
    pipeline: PipelineDep,
    upload_id: str = Query(min_length=1),
):
    return ok(pipeline.chunk_status(profile, upload_id))


@router.post(
    "/{scope}/complete",
    summary="Complete Chunked Upload",
    description="Assemble every chunk and store the file.",
    response_description="The stored file.",
    responses={
        400: {"description": "Chunks missing (listed in missing_chunks) or file rejected"},
        404: {"description": "Upload not found or expired"},
    },
)
async def complete_chunked(
    request: ChunkComplete,
    profile: ProfileDep,
    session: SessionDep,
    uploader: UploaderDep,
    pipeline: PipelineDep,
):
    stored = await pipeline.complete_chunked(profile, request.upload_id, request.filename)
    stored = await _record_or_discard(session, pipeline, profile, stored, uploader)
    return ok(stored, message="Upload completed")


@router.post(
    "/{scope}/multipart/initiate",
    summary="Start Multipart Upload",
    description="Start an S3 multipart upload and get a presigned URL for every part.",
    response_description="Upload id, object key and part URLs.",
    responses={400: {"description": "File type or size not accepted"}},
)
async def initiate_multipart(
    request: MultipartInitiate, profile: ProfileDep, uploader: UploaderDep, pipeline: PipelineDep
):
    """
    Start a multipart upload.

    - **filename**, **file_type**, **file_size**: Describe the file
    - **part_size**: Bytes per part (at least 5MB, default 10MB)

    PUT each part to its URL and keep the ``ETag`` response header for completion.
    """
    session_info = await pipeline.initiate_multipart(
        profile, request.filename, request.file_type, request.file_size, request.part_size
    )
    return ok(session_info)


@router.post(
    "/{scope}/multipart/part",
    summary="Verify Part",
    description="Look up the ETag of an uploaded part (for clients that cannot read response headers).",
    response_description="Part number, ETag and size.",
    responses={404: {"description": "Part not uploaded yet"}},
)
async def verify_part(request: MultipartPartQuery, profile: ProfileDep, uploader: UploaderDep, pipeline: PipelineDep):
    part = await pipeline.verify_part(profile, request.key, request.upload_id, request.part_number)
    return ok(part)


@router.post(
    "/{scope}/multipart/complete",
    summary="Complete Multipart Upload",
    description="Check every part against storage and complete the upload.",
    response_description="The stored file.",
    responses={400: {"description": "Unknown part, ETag mismatch or file rejected"}},
)
async def complete_multipart(
    request: MultipartComplete,
    profile: ProfileDep,
    session: SessionDep,
    uploader: UploaderDep,
    pipeline: PipelineDep,
):
    """
    Complete a multipart upload.

    If the file cannot be recorded in the media library the stored object is
    kept and its URLs are returned with the 500 response.
    """
    stored = await pipeline.complete_multipart(profile, request)
    if profile.record_media:
        try:
            stored.media_item = await record_media(session, stored, uploader)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Failed to record {stored.key} in the media library: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={
                    "error": "File uploaded but could not be recorded in the media library",
                    "file": stored.model_dump(mode="json"),
                },
            )
    return ok(stored, message="Upload completed")


@router.post(
    "/{scope}/multipart/abort",
    summary="Abort Multipart Upload",
    description="Abort a multipart upload and discard its parts.",
    response_description="Confirmation.",
)
async def abort_multipart(request: MultipartAbort, profile: ProfileDep, uploader: UploaderDep, pipeline: PipelineDep):
    await pipeline.abort_multipart(profile, request.key, request.upload_id)
    return ok({"key": request.key, "upload_id": request.upload_id}, message="Upload aborted")

"""
Upload pipeline.

Promotes files into object storage through three flows:

* single-shot: the whole file arrives in one request and is PUT directly;
* chunked: pieces are collected in the :class:`ChunkStore`, then assembled
  and PUT on completion;
* multipart: the client uploads parts straight to S3 through presigned URLs
  and the server only initiates, verifies, completes or aborts.

Every flow validates against an :class:`UploadProfile` and returns a
:class:`StoredFile`. Recording the result in the media library is left to
the caller (it owns the database session).
"""

from __future__ import annotations

import math
from pathlib import PurePosixPath
from typing import List, Optional

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import MediaKind
from campaign_portal.core.models.io.media import (
    ChunkReceipt,
    ChunkStatus,
    MultipartComplete,
    MultipartSession,
    PresignedPart,
    StoredFile,
    UploadedPart,
)
from campaign_portal.core.monitoring import log_upload_event
from campaign_portal.server.core import constant

from .chunk_store import ChunkMetadata, ChunkStore
from .storage import StorageClient, StoredObject
from .upload_profiles import UploadProfile, UploadRejected, mime_from_filename, unique_filename

logger = get_logger(__name__)


class UploadNotFound(LookupError):
    """Unknown or expired upload id / multipart part."""


def _clean_etag(etag: str) -> str:
    return etag.strip().strip('"')


class UploadPipeline:
    """
    Coordinates storage and the chunk store for one request.

    Args:
        storage: Object storage client
        chunks: Process-wide chunk store
        presign_expires: Lifetime of presigned part URLs in seconds
    """

    def __init__(self, storage: StorageClient, chunks: ChunkStore, presign_expires: int = 3600):
        self.storage = storage
        self.chunks = chunks
        self.presign_expires = presign_expires

    def _stored_file(
        self,
        obj: StoredObject,
        original_filename: str,
        kind: MediaKind,
        mime_type: str,
        size: int,
    ) -> StoredFile:
        return StoredFile(
            key=obj.key,
            url=obj.cdn_url,
            s3_url=obj.s3_url,
            filename=PurePosixPath(obj.key).name,
            original_filename=original_filename,
            file_type=kind,
            mime_type=mime_type,
            size=size,
        )

    # ------------------------------------------------------------------
    # Single-shot
    # ------------------------------------------------------------------

    async def store(self, profile: UploadProfile, original_filename: str, content_type: str, data: bytes) -> StoredFile:
        """Validate and PUT a complete file."""
        content_type = content_type or mime_from_filename(original_filename)
        kind = profile.validate(content_type, len(data))
        key = profile.object_key(kind, unique_filename(original_filename, content_type))
        obj = await self.storage.put_object(key, data, content_type)
        log_upload_event(profile.scope, "stored", key=key, size=len(data))
        return self._stored_file(obj, original_filename, kind, content_type, len(data))

    async def discard(self, stored: StoredFile) -> None:
        """Delete an object that could not be recorded."""
        try:
            await self.storage.delete_object(stored.key)
            logger.info(f"Removed orphaned object {stored.key}")
        except Exception as e:
            logger.error(f"Failed to remove orphaned object {stored.key}: {e}")

    # ------------------------------------------------------------------
    # Chunked
    # ------------------------------------------------------------------

    def receive_chunk(
        self,
        profile: UploadProfile,
        upload_id: str,
        chunk_index: int,
        total_chunks: int,
        data: bytes,
        filename: str,
        file_type: Optional[str] = None,
        file_size: Optional[int] = None,
        owner: Optional[int] = None,
    ) -> ChunkReceipt:
        """
        Record one chunk.

        The declared type and size are checked on the first chunk so a client
        learns early that the file will be refused. The first chunk also fixes
        how many bytes the upload may hold: the declared size, capped by the
        scope's limit for that kind of file.

        Raises:
            UploadRejected: type or declared size not accepted, or too many chunks
            ChunkUploadError: the chunk does not fit the upload
        """
        max_bytes = None
        if not self.chunks.has(upload_id):
            declared_type = file_type or mime_from_filename(filename)
            kind = profile.validate(declared_type, file_size if file_size is not None else max(len(data), 1))
            kind_limit = profile.max_sizes[kind]
            max_chunks = math.ceil(kind_limit / constant.MIN_CHUNK_SIZE)
            if total_chunks > max_chunks:
                raise UploadRejected(f"totalChunks {total_chunks} exceeds the limit of {max_chunks} for this file")
            max_bytes = min(file_size, kind_limit) if file_size is not None else kind_limit
        metadata = ChunkMetadata(
            filename=filename,
            file_type=file_type,
            file_size=file_size,
            scope=profile.scope,
            owner=owner,
            max_bytes=max_bytes,
        )
        upload = self.chunks.put_chunk(upload_id, chunk_index, total_chunks, data, metadata)
        logger.debug(f"Chunk {chunk_index + 1}/{total_chunks} received for {upload_id}")
        return ChunkReceipt(
            upload_id=upload_id,
            chunk_index=chunk_index,
            received_chunks=upload.received,
            total_chunks=upload.total_chunks,
            complete=upload.complete,
        )

    def chunk_status(self, profile: UploadProfile, upload_id: str) -> ChunkStatus:
        """Progress of an upload; ids opened under another scope are reported as unknown."""
        upload = self.chunks.get(upload_id)
        if upload is None or upload.metadata.scope != profile.scope:
            raise UploadNotFound("Upload not found or expired")
        self.chunks.touch(upload_id)
        return ChunkStatus(
            upload_id=upload_id,
            received_chunks=upload.received,
            total_chunks=upload.total_chunks,
            missing_chunks=upload.missing,
            complete=upload.complete,
        )

    async def complete_chunked(
        self, profile: UploadProfile, upload_id: str, filename: Optional[str] = None
    ) -> StoredFile:
        """
        Assemble a chunked upload and promote it to storage.

        ``filename`` replaces the name given with the chunks, for clients that
        only know the final name once every chunk is sent.

        Raises:
            UploadNotFound: unknown or expired upload id
            IncompleteUploadError: some chunks were never received
            UploadRejected: wrong scope, type or size
        """
        upload = self.chunks.get(upload_id)
        if upload is None:
            raise UploadNotFound("Upload not found or expired")
        if upload.metadata.scope != profile.scope:
            raise UploadRejected("Upload id belongs to a different upload scope")

        data = self.chunks.assemble(upload_id)
        meta = upload.metadata
        name = filename or meta.filename
        stored = await self.store(profile, name, meta.file_type or mime_from_filename(name), data)
        self.chunks.delete(upload_id)
        log_upload_event(profile.scope, "chunked upload completed", key=stored.key, size=stored.size)
        return stored

    # ------------------------------------------------------------------
    # Multipart
    # ------------------------------------------------------------------

    async def initiate_multipart(
        self,
        profile: UploadProfile,
        filename: str,
        file_type: str,
        file_size: int,
        part_size: Optional[int] = None,
    ) -> MultipartSession:
        """Start an S3 multipart upload and presign a URL for every part."""
        kind = profile.validate(file_type, file_size)
        effective_part_size = max(part_size or constant.DEFAULT_MULTIPART_PART_SIZE, constant.MIN_MULTIPART_PART_SIZE)
        total_parts = math.ceil(file_size / effective_part_size)
        if total_parts > constant.MAX_MULTIPART_PARTS:
            raise UploadRejected("File needs more than 10000 parts; use a larger part size")

        stored_name = unique_filename(filename, file_type)
        key = profile.object_key(kind, stored_name)
        upload_id = await self.storage.create_multipart_upload(key, file_type)
        urls = await self.storage.presign_part_urls(key, upload_id, total_parts, expires=self.presign_expires)
        log_upload_event(profile.scope, "multipart initiated", key=key, size=file_size)
        return MultipartSession(
            upload_id=upload_id,
            key=key,
            filename=stored_name,
            original_filename=filename,
            file_type=file_type,
            kind=kind,
            total_parts=total_parts,
            part_size=effective_part_size,
            urls=[PresignedPart(**url) for url in urls],
        )

    def _check_key(self, profile: UploadProfile, key: str) -> None:
        if not profile.owns_key(key):
            raise UploadRejected("Object key does not belong to this upload scope")

    async def verify_part(self, profile: UploadProfile, key: str, upload_id: str, part_number: int) -> UploadedPart:
        """Look up an uploaded part's ETag through list-parts."""
        self._check_key(profile, key)
        parts = await self.storage.list_parts(key, upload_id)
        for part in parts:
            if part["part_number"] == part_number:
                return UploadedPart(part_number=part_number, etag=part["etag"], size=part.get("size"))
        raise UploadNotFound(f"Part {part_number} has not been uploaded")

    async def complete_multipart(self, profile: UploadProfile, request: MultipartComplete) -> StoredFile:
        """
        Complete a multipart upload after checking every part against list-parts.

        Raises:
            UploadRejected: key outside the scope, unknown part, ETag mismatch or oversize
        """
        self._check_key(profile, request.key)
        listed = {p["part_number"]: p for p in await self.storage.list_parts(request.key, request.upload_id)}
        parts: List[dict] = []
        for part in sorted(request.parts, key=lambda p: p.part_number):
            uploaded = listed.get(part.part_number)
            if uploaded is None:
                raise UploadRejected(f"Part {part.part_number} has not been uploaded")
            if _clean_etag(uploaded["etag"]) != _clean_etag(part.etag):
                raise UploadRejected(f"ETag mismatch for part {part.part_number}")
            parts.append({"part_number": part.part_number, "etag": uploaded["etag"], "size": uploaded.get("size")})

        size = sum(p["size"] or 0 for p in parts) or request.file_size or 0
        filename = PurePosixPath(request.key).name
        file_type = request.file_type or mime_from_filename(filename)
        try:
            kind = profile.validate(file_type, size)
        except UploadRejected:
            await self.storage.abort_multipart_upload(request.key, request.upload_id)
            raise

        obj = await self.storage.complete_multipart_upload(request.key, request.upload_id, parts)
        log_upload_event(profile.scope, "multipart completed", key=request.key, size=size)
        return self._stored_file(obj, request.original_filename or filename, kind, file_type, size)

    async def abort_multipart(self, profile: UploadProfile, key: str, upload_id: str) -> None:
        self._check_key(profile, key)
        await self.storage.abort_multipart_upload(key, upload_id)
        log_upload_event(profile.scope, "multipart aborted", key=key)

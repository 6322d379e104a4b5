"""
In-memory tracker for chunked uploads.

A client splits a file into ``total_chunks`` pieces and posts them one by one
under a client-chosen upload id. Each entry keeps one slot per chunk plus the
time it was last touched; :class:`ChunkSweeper` drops entries that have been
idle for longer than the TTL. State is process-local and not coordinated
between concurrent requests for the same id (the last write to a slot wins).
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from campaign_portal.core.logging_config import get_logger
from campaign_portal.server.core import constant
from campaign_portal.server.core.config import settings

logger = get_logger(__name__)


class ChunkUploadError(ValueError):
    """A chunk does not fit the upload it claims to belong to."""


class IncompleteUploadError(ChunkUploadError):
    def __init__(self, upload_id: str, missing: List[int]):
        self.upload_id = upload_id
        self.missing = missing
        super().__init__(f"Upload {upload_id} is missing chunks: {missing}")


@dataclass
class ChunkMetadata:
    filename: str
    file_type: Optional[str]
    file_size: Optional[int]
    scope: str
    owner: Optional[int] = None
    max_bytes: Optional[int] = None


@dataclass
class ChunkUpload:
    chunks: List[Optional[bytes]]
    metadata: ChunkMetadata
    last_access: float = field(default_factory=time.monotonic)

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def received(self) -> int:
        return sum(1 for chunk in self.chunks if chunk is not None)

    @property
    def received_bytes(self) -> int:
        return sum(len(chunk) for chunk in self.chunks if chunk is not None)

    @property
    def missing(self) -> List[int]:
        return [index for index, chunk in enumerate(self.chunks) if chunk is None]

    @property
    def complete(self) -> bool:
        return all(chunk is not None for chunk in self.chunks)


class ChunkStore:
    """
    Map of upload id to :class:`ChunkUpload`.

    Args:
        ttl_seconds: Idle time after which :meth:`sweep` discards an entry
        max_chunks: Largest ``total`` a new upload may announce
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: int = 30 * 60,
        max_chunks: int = constant.MAX_CHUNKS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_chunks = max_chunks
        self._clock = clock
        self._uploads: Dict[str, ChunkUpload] = {}

    def __len__(self) -> int:
        return len(self._uploads)

    def has(self, upload_id: str) -> bool:
        return upload_id in self._uploads

    def get(self, upload_id: str) -> Optional[ChunkUpload]:
        return self._uploads.get(upload_id)

    def set(self, upload_id: str, upload: ChunkUpload) -> None:
        upload.last_access = self._clock()
        self._uploads[upload_id] = upload

    def delete(self, upload_id: str) -> bool:
        return self._uploads.pop(upload_id, None) is not None

    def touch(self, upload_id: str) -> None:
        upload = self._uploads.get(upload_id)
        if upload is not None:
            upload.last_access = self._clock()

    def put_chunk(
        self,
        upload_id: str,
        index: int,
        total: int,
        data: bytes,
        metadata: ChunkMetadata,
    ) -> ChunkUpload:
        """
        Store one chunk, creating the entry on first sight.

        Raises:
            ChunkUploadError: when ``index`` is outside ``[0, total)``, ``total``
                exceeds ``max_chunks`` or differs from the existing entry, the id
                belongs to another scope, or the held bytes would pass ``max_bytes``
        """
        if total < 1:
            raise ChunkUploadError("totalChunks must be at least 1")
        if index < 0 or index >= total:
            raise ChunkUploadError(f"chunkIndex {index} is out of range for {total} chunks")

        upload = self._uploads.get(upload_id)
        if upload is None:
            if total > self.max_chunks:
                raise ChunkUploadError(f"totalChunks {total} exceeds the limit of {self.max_chunks} chunks")
            upload = ChunkUpload(chunks=[None] * total, metadata=metadata, last_access=self._clock())
            self._uploads[upload_id] = upload
            logger.debug(f"Started chunked upload {upload_id} ({total} chunks, scope={metadata.scope})")
        else:
            if upload.total_chunks != total:
                raise ChunkUploadError(
                    f"totalChunks {total} does not match the {upload.total_chunks} announced for this upload"
                )
            if upload.metadata.scope != metadata.scope:
                raise ChunkUploadError("Upload id belongs to a different upload scope")

        limit = upload.metadata.max_bytes
        if limit is not None:
            previous = upload.chunks[index]
            held = upload.received_bytes - (len(previous) if previous is not None else 0) + len(data)
            if held > limit:
                if upload.received == 0:
                    del self._uploads[upload_id]
                raise ChunkUploadError(f"Upload {upload_id} exceeds its size limit of {limit} bytes")

        upload.chunks[index] = data
        upload.last_access = self._clock()
        return upload

    def received(self, upload_id: str) -> int:
        upload = self._uploads.get(upload_id)
        return upload.received if upload else 0

    def missing(self, upload_id: str) -> List[int]:
        upload = self._uploads.get(upload_id)
        return upload.missing if upload else []

    def assemble(self, upload_id: str) -> bytes:
        """
        Concatenate all chunks in order.

        Raises:
            KeyError: unknown or expired upload id
            IncompleteUploadError: some slots are still empty
        """
        upload = self._uploads[upload_id]
        missing = upload.missing
        if missing:
            raise IncompleteUploadError(upload_id, missing)
        upload.last_access = self._clock()
        return b"".join(upload.chunks)  # type: ignore[arg-type]

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop entries idle for longer than the TTL; returns how many were dropped."""
        now = self._clock() if now is None else now
        expired = [uid for uid, upload in self._uploads.items() if now - upload.last_access > self.ttl_seconds]
        for upload_id in expired:
            del self._uploads[upload_id]
        if expired:
            logger.info(f"Expired {len(expired)} stale chunked upload(s)")
        return len(expired)


class ChunkSweeper:
    """Background task calling :meth:`ChunkStore.sweep` on a fixed interval."""

    def __init__(self, store: ChunkStore, interval_seconds: float):
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.store.sweep()
            except Exception as e:
                logger.error(f"Chunk sweep failed: {e}", exc_info=True)

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="chunk-sweeper")
            logger.info(f"Chunk sweeper started (interval={self.interval_seconds}s, ttl={self.store.ttl_seconds}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Chunk sweeper stopped")


chunk_store = ChunkStore(ttl_seconds=settings.uploads.chunk_ttl_seconds)


def get_chunk_store() -> ChunkStore:
    """Dependency returning the process-wide chunk store."""
    return chunk_store

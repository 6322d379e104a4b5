"""Media library and upload I/O models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from campaign_portal.core.models.domain.enums import MediaKind

from .common import EntityRead


class MediaItemRead(EntityRead):
    filename: str
    original_filename: str
    file_type: MediaKind
    mime_type: str
    file_size: int
    s3_key: str
    s3_url: str
    cloudfront_url: Optional[str] = None
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    uploaded_by: Optional[int] = None


class MediaItemUpdate(BaseModel):
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    description: Optional[str] = None


class MediaDateBucket(BaseModel):
    year: int
    month: int
    count: int


class StoredFile(BaseModel):
    """A file promoted to object storage."""

    key: str
    url: str = Field(description="CDN URL when a CDN is configured, else the bucket URL")
    s3_url: str
    filename: str
    original_filename: str
    file_type: MediaKind
    mime_type: str
    size: int
    media_item: Optional[MediaItemRead] = None


class UploadResult(BaseModel):
    filename: str
    success: bool
    file: Optional[StoredFile] = None
    error: Optional[str] = None


class ChunkReceipt(BaseModel):
    upload_id: str
    chunk_index: int
    received_chunks: int
    total_chunks: int
    complete: bool


class ChunkStatus(BaseModel):
    upload_id: str
    received_chunks: int
    total_chunks: int
    missing_chunks: list[int]
    complete: bool


class ChunkComplete(BaseModel):
    upload_id: str = Field(min_length=1)
    filename: Optional[str] = Field(default=None, min_length=1, description="Replaces the name sent with the chunks")


class MultipartInitiate(BaseModel):
    filename: str = Field(min_length=1)
    file_type: str = Field(min_length=1, description="MIME type of the file")
    file_size: int = Field(gt=0)
    part_size: Optional[int] = Field(default=None, gt=0)


class PresignedPart(BaseModel):
    part_number: int
    url: str


class MultipartSession(BaseModel):
    upload_id: str
    key: str
    filename: str
    original_filename: str
    file_type: str
    kind: MediaKind
    total_parts: int
    part_size: int
    urls: list[PresignedPart]


class MultipartPartQuery(BaseModel):
    key: str = Field(min_length=1)
    upload_id: str = Field(min_length=1)
    part_number: int = Field(ge=1, le=10_000)


class UploadedPart(BaseModel):
    part_number: int = Field(ge=1, le=10_000)
    etag: str = Field(min_length=1)
    size: Optional[int] = None


class MultipartComplete(BaseModel):
    key: str = Field(min_length=1)
    upload_id: str = Field(min_length=1)
    parts: list[UploadedPart] = Field(min_length=1)
    original_filename: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)


class MultipartAbort(BaseModel):
    key: str = Field(min_length=1)
    upload_id: str = Field(min_length=1)


class UploadScopeInfo(BaseModel):
    scope: str
    staff_only: bool
    accepted_types: list[str]
    max_sizes: dict[str, int]
    min_part_size: int
    chunk_ttl_seconds: int
    extra: dict[str, Any] = Field(default_factory=dict)

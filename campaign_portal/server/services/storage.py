"""
Object Storage Client.

Thin async wrapper around a boto3 S3 client. boto3 is blocking, so every call
is pushed to the default executor. Covers what the upload flows need: single
PUT, delete, presigned PUT, and the multipart protocol (create, presigned
part URLs, list parts, complete, abort). Public URLs are derived from the
bucket/region and the optional CDN domain.
"""

from __future__ import annotations

import asyncio
import functools
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core import constant
from campaign_portal.server.core.config import AWSConfig, settings

logger = get_logger(__name__)


class StorageError(Exception):
    """Raised when an object storage operation fails."""


class StorageNotConfiguredError(StorageError):
    """Raised when required storage settings are missing."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Object storage is not configured (missing: {', '.join(missing)})")


@dataclass(frozen=True)
class StoredObject:
    key: str
    s3_url: str
    cdn_url: str
    size: Optional[int] = None


class StorageClient:
    """
    S3 client bound to one bucket.

    Args:
        bucket_name: Target bucket
        region_name: Bucket region
        access_key: AWS access key id
        secret_key: AWS secret access key
        cdn_domain: CDN domain serving the bucket, with or without scheme
        endpoint_url: Custom S3-compatible endpoint (MinIO, LocalStack...)
    """

    def __init__(
        self,
        bucket_name: str,
        region_name: str = "ap-south-1",
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        cdn_domain: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        s3_client: Any = None,
    ):
        self.bucket_name = bucket_name
        self.region_name = region_name
        self.cdn_domain = cdn_domain
        self.endpoint_url = endpoint_url

        if s3_client is not None:
            self.s3_client = s3_client
        else:
            config = Config(
                region_name=region_name,
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "standard"},
            )
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                config=config,
            )
        logger.info(f"Storage client initialized for bucket '{bucket_name}' in {region_name}")

    @classmethod
    def from_config(cls, aws: AWSConfig) -> "StorageClient":
        missing = aws.missing()
        if missing:
            raise StorageNotConfiguredError(missing)
        return cls(
            bucket_name=aws.bucket_name,
            region_name=aws.region,
            access_key=aws.access_key_id,
            secret_key=aws.secret_access_key,
            cdn_domain=aws.cloudfront_domain,
            endpoint_url=aws.endpoint_url,
        )

    async def _call(self, func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 call {getattr(func, '__name__', func)} failed: {e}")
            raise StorageError(str(e)) from e

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def s3_url(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region_name}.amazonaws.com/{key}"

    def cdn_url(self, key: str) -> str:
        """CDN URL for ``key``; falls back to the bucket URL without a CDN."""
        if not self.cdn_domain:
            return self.s3_url(key)
        domain = self.cdn_domain.rstrip("/")
        if not domain.startswith(("http://", "https://")):
            domain = f"https://{domain}"
        return f"{domain}/{key}"

    def stored(self, key: str, size: Optional[int] = None) -> StoredObject:
        return StoredObject(key=key, s3_url=self.s3_url(key), cdn_url=self.cdn_url(key), size=size)

    # ------------------------------------------------------------------
    # Single objects
    # ------------------------------------------------------------------

    async def put_object(self, key: str, body: bytes, content_type: str) -> StoredObject:
        """Upload ``body`` as one object with a long-lived cache header."""
        await self._call(
            self.s3_client.put_object,
            Bucket=self.bucket_name,
            Key=key,
            Body=body,
            ContentType=content_type,
            CacheControl=constant.CACHE_CONTROL_IMMUTABLE,
            Metadata={"uploadedAt": utc_now().isoformat()},
        )
        logger.debug(f"Stored s3://{self.bucket_name}/{key} ({len(body)} bytes)")
        return self.stored(key, size=len(body))

    async def delete_object(self, key: str) -> None:
        await self._call(self.s3_client.delete_object, Bucket=self.bucket_name, Key=key)
        logger.debug(f"Deleted s3://{self.bucket_name}/{key}")

    async def presign_put(self, key: str, content_type: str, expires: int = 3600) -> str:
        return await self._call(
            self.s3_client.generate_presigned_url,
            "put_object",
            Params={"Bucket": self.bucket_name, "Key": key, "ContentType": content_type},
            ExpiresIn=expires,
        )

    # ------------------------------------------------------------------
    # Multipart
    # ------------------------------------------------------------------

    async def create_multipart_upload(self, key: str, content_type: str) -> str:
        response = await self._call(
            self.s3_client.create_multipart_upload,
            Bucket=self.bucket_name,
            Key=key,
            ContentType=content_type,
            CacheControl=constant.CACHE_CONTROL_IMMUTABLE,
            Metadata={"uploadedAt": utc_now().isoformat()},
        )
        return response["UploadId"]

    async def presign_part_urls(
        self, key: str, upload_id: str, total_parts: int, expires: int = 3600
    ) -> List[Dict[str, Any]]:
        """Presigned ``upload_part`` URL for each part number 1..total_parts."""
        urls = []
        for part_number in range(1, total_parts + 1):
            url = await self._call(
                self.s3_client.generate_presigned_url,
                "upload_part",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": key,
                    "UploadId": upload_id,
                    "PartNumber": part_number,
                },
                ExpiresIn=expires,
            )
            urls.append({"part_number": part_number, "url": url})
        return urls

    async def list_parts(self, key: str, upload_id: str) -> List[Dict[str, Any]]:
        """All parts uploaded so far, following pagination markers."""
        parts: List[Dict[str, Any]] = []
        marker = 0
        while True:
            response = await self._call(
                self.s3_client.list_parts,
                Bucket=self.bucket_name,
                Key=key,
                UploadId=upload_id,
                PartNumberMarker=marker,
            )
            for part in response.get("Parts", []):
                parts.append({"part_number": part["PartNumber"], "etag": part["ETag"], "size": part.get("Size")})
            if not response.get("IsTruncated"):
                return parts
            marker = response.get("NextPartNumberMarker", 0)

    async def complete_multipart_upload(
        self, key: str, upload_id: str, parts: List[Dict[str, Any]]
    ) -> StoredObject:
        ordered = sorted(parts, key=lambda p: p["part_number"])
        await self._call(
            self.s3_client.complete_multipart_upload,
            Bucket=self.bucket_name,
            Key=key,
            UploadId=upload_id,
            MultipartUpload={"Parts": [{"PartNumber": p["part_number"], "ETag": p["etag"]} for p in ordered]},
        )
        size = sum(p.get("size") or 0 for p in ordered) or None
        logger.info(f"Completed multipart upload {upload_id} -> s3://{self.bucket_name}/{key}")
        return self.stored(key, size=size)

    async def abort_multipart_upload(self, key: str, upload_id: str) -> None:
        await self._call(
            self.s3_client.abort_multipart_upload,
            Bucket=self.bucket_name,
            Key=key,
            UploadId=upload_id,
        )
        logger.info(f"Aborted multipart upload {upload_id} for {key}")


_storage_client: Optional[StorageClient] = None


def get_storage() -> StorageClient:
    """Dependency returning the process-wide storage client.

    Raises:
        StorageNotConfiguredError: when AWS settings are incomplete
    """
    global _storage_client
    if _storage_client is None:
        _storage_client = StorageClient.from_config(settings.aws)
    return _storage_client

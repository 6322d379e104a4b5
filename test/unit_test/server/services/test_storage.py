import pytest

from campaign_portal.server.core.config import AWSConfig
from campaign_portal.server.services.storage import (
    StorageClient,
    StorageError,
    StorageNotConfiguredError,
)


class TestUrls:
    def test_cdn_domain_without_scheme(self, storage):
        assert storage.cdn_url("media/a.jpg") == "https://cdn.test/media/a.jpg"

    def test_cdn_domain_with_scheme(self, fake_s3):
        client = StorageClient("bucket", cdn_domain="http://cdn.local/", s3_client=fake_s3)
        assert client.cdn_url("a.jpg") == "http://cdn.local/a.jpg"

    def test_without_cdn_falls_back_to_bucket(self, fake_s3):
        client = StorageClient("bucket", region_name="us-east-1", s3_client=fake_s3)
        assert client.cdn_url("a.jpg") == "https://bucket.s3.us-east-1.amazonaws.com/a.jpg"

    def test_custom_endpoint(self, fake_s3):
        client = StorageClient("bucket", endpoint_url="http://minio:9000/", s3_client=fake_s3)
        assert client.s3_url("a.jpg") == "http://minio:9000/bucket/a.jpg"


def test_from_config_requires_credentials():
    with pytest.raises(StorageNotConfiguredError) as excinfo:
        StorageClient.from_config(AWSConfig(bucket_name="bucket"))
    assert excinfo.value.missing == ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"]


@pytest.mark.asyncio
class TestObjects:
    async def test_put_object(self, storage, fake_s3):
        stored = await storage.put_object("media/a.txt", b"hello", "text/plain")
        assert stored.size == 5
        assert stored.cdn_url == "https://cdn.test/media/a.txt"
        assert fake_s3.objects["media/a.txt"]["body"] == b"hello"

    async def test_client_errors_are_wrapped(self, storage, fake_s3):
        fake_s3.fail_deletes = True
        with pytest.raises(StorageError, match="AccessDenied"):
            await storage.delete_object("media/a.txt")

    async def test_presign_put(self, storage):
        url = await storage.presign_put("media/a.jpg", "image/jpeg")
        assert url == "http://mock-s3/test-bucket/media/a.jpg"

    async def test_list_parts_of_unknown_upload(self, storage):
        with pytest.raises(StorageError):
            await storage.list_parts("media/a.mp4", "missing")

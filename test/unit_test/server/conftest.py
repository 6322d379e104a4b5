"""
Fixtures for the API tests.

Every test gets a fresh in-memory SQLite database, an in-memory S3 stand-in
behind the real :class:`StorageClient`, a private chunk store and an SMS
client wired to ``httpx.MockTransport``.
"""

from typing import AsyncGenerator, Dict, List

import httpx
import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from campaign_portal.core.database import create_all, create_engine, create_sessionmaker, get_session
from campaign_portal.core.database.entities import User
from campaign_portal.core.models.domain.enums import UserRole
from campaign_portal.server.core.config import SMSConfig, settings
from campaign_portal.server.services.auth import create_session_token, hash_password
from campaign_portal.server.services.chunk_store import ChunkStore, get_chunk_store
from campaign_portal.server.services.sms import SmsClient, get_sms_client
from campaign_portal.server.services.storage import StorageClient, get_storage

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
PASSWORD = "correct-horse-battery"


class FakeS3:
    """In-memory stand-in for the boto3 S3 client methods the storage client calls."""

    def __init__(self):
        self.objects: Dict[str, dict] = {}
        self.uploads: Dict[str, dict] = {}
        self.aborted: List[str] = []
        self.fail_deletes = False

    @staticmethod
    def _error(code: str, operation: str) -> ClientError:
        return ClientError({"Error": {"Code": code, "Message": code}}, operation)

    def put_object(self, Bucket, Key, Body, ContentType, **kwargs):
        self.objects[Key] = {"body": Body, "content_type": ContentType}
        return {"ETag": '"put"'}

    def delete_object(self, Bucket, Key):
        if self.fail_deletes:
            raise self._error("AccessDenied", "DeleteObject")
        self.objects.pop(Key, None)
        return {}

    def generate_presigned_url(self, ClientMethod, Params=None, ExpiresIn=3600):
        part = Params.get("PartNumber")
        suffix = f"?partNumber={part}" if part else ""
        return f"http://mock-s3/{Params['Bucket']}/{Params['Key']}{suffix}"

    def create_multipart_upload(self, Bucket, Key, ContentType, **kwargs):
        upload_id = f"mpu-{len(self.uploads) + 1}"
        self.uploads[upload_id] = {"key": Key, "content_type": ContentType, "parts": {}}
        return {"UploadId": upload_id}

    def upload_part(self, upload_id: str, part_number: int, data: bytes) -> str:
        """Simulate a client PUT to a presigned part URL; returns the ETag."""
        etag = f'"etag-{part_number}"'
        self.uploads[upload_id]["parts"][part_number] = (etag, len(data))
        return etag

    def list_parts(self, Bucket, Key, UploadId, PartNumberMarker=0):
        upload = self.uploads.get(UploadId)
        if upload is None or upload["key"] != Key:
            raise self._error("NoSuchUpload", "ListParts")
        parts = [
            {"PartNumber": number, "ETag": etag, "Size": size}
            for number, (etag, size) in sorted(upload["parts"].items())
            if number > PartNumberMarker
        ]
        return {"Parts": parts, "IsTruncated": False}

    def complete_multipart_upload(self, Bucket, Key, UploadId, MultipartUpload):
        upload = self.uploads.pop(UploadId)
        self.objects[Key] = {"body": None, "content_type": upload["content_type"]}
        return {"Key": Key}

    def abort_multipart_upload(self, Bucket, Key, UploadId):
        self.uploads.pop(UploadId, None)
        self.aborted.append(UploadId)
        return {}


@pytest_asyncio.fixture
async def engine():
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def fake_s3() -> FakeS3:
    return FakeS3()


@pytest.fixture
def storage(fake_s3: FakeS3) -> StorageClient:
    return StorageClient(bucket_name="test-bucket", region_name="ap-south-1", cdn_domain="cdn.test", s3_client=fake_s3)


@pytest.fixture
def chunk_store() -> ChunkStore:
    return ChunkStore(ttl_seconds=60)


@pytest.fixture
def sms_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def sms_client(sms_requests: List[httpx.Request]) -> SmsClient:
    def handler(request: httpx.Request) -> httpx.Response:
        sms_requests.append(request)
        return httpx.Response(200, json={"status": "success", "message_id": "m-1"})

    config = SMSConfig(api_url="http://mock-sms/api/send", api_key="sms-key", sender_id="CAMPAIGN")
    return SmsClient(config, transport=httpx.MockTransport(handler))


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest_asyncio.fixture
async def users(session: AsyncSession) -> Dict[str, User]:
    """An admin, a moderator and a plain user, all with password ``PASSWORD``."""
    created = {}
    for role in (UserRole.admin, UserRole.moderator, UserRole.user):
        user = User(
            email=f"{role.value}@campaign-portal.org",
            full_name=f"{role.value.title()} Person",
            password_hash=hash_password(PASSWORD),
            role=role,
        )
        session.add(user)
        created[role.value] = user
    await session.commit()
    for user in created.values():
        await session.refresh(user)
    return created


@pytest.fixture
def app(session: AsyncSession, storage: StorageClient, chunk_store: ChunkStore, sms_client: SmsClient):
    from campaign_portal.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_chunk_store] = lambda: chunk_store
    app.dependency_overrides[get_sms_client] = lambda: sms_client
    yield app
    app.dependency_overrides.clear()


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture(name="client")
async def client_fixture(app) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous visitor."""
    async with _client(app) as client:
        yield client


@pytest_asyncio.fixture
async def staff_client(app, users) -> AsyncGenerator[AsyncClient, None]:
    """Signed in as the moderator."""
    async with _client(app) as client:
        client.cookies.set(settings.session.cookie_name, create_session_token(users["moderator"]))
        yield client


@pytest_asyncio.fixture
async def admin_client(app, users) -> AsyncGenerator[AsyncClient, None]:
    """Signed in as the admin."""
    async with _client(app) as client:
        client.cookies.set(settings.session.cookie_name, create_session_token(users["admin"]))
        yield client


@pytest_asyncio.fixture
async def user_client(app, users) -> AsyncGenerator[AsyncClient, None]:
    """Signed in as a user without console access."""
    async with _client(app) as client:
        client.cookies.set(settings.session.cookie_name, create_session_token(users["user"]))
        yield client

"""
Dependency aliases.

``Annotated`` shortcuts for the services routers depend on, so every
endpoint signature reads the same way and tests can override the
underlying providers through ``app.dependency_overrides``.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_portal.core.database import get_session
from campaign_portal.core.database.entities.users import User
from campaign_portal.core.utils import Pagination
from campaign_portal.server.core import constant
from campaign_portal.server.core.config import settings

from .auth import AdminUser, CurrentUser, OptionalUser, StaffUser, get_current_user, get_optional_user
from .chunk_store import ChunkStore, get_chunk_store
from .sms import SmsClient, get_sms_client
from .storage import StorageClient, get_storage
from .upload_pipeline import UploadPipeline
from .upload_profiles import UploadProfile, get_profile

SessionDep = Annotated[AsyncSession, Depends(get_session)]
StorageDep = Annotated[StorageClient, Depends(get_storage)]
ChunkStoreDep = Annotated[ChunkStore, Depends(get_chunk_store)]
SmsDep = Annotated[SmsClient, Depends(get_sms_client)]


def get_pagination(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(constant.DEFAULT_PAGE_SIZE, ge=1, description="Items per page, capped at 100"),
) -> Pagination:
    return Pagination.from_query(page, limit, constant.MAX_PAGE_SIZE)


PageDep = Annotated[Pagination, Depends(get_pagination)]


def get_upload_profile(scope: str = Path(description="Upload scope name")) -> UploadProfile:
    profile = get_profile(scope)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown upload scope '{scope}'")
    return profile


def get_upload_pipeline(storage: StorageDep, chunks: ChunkStoreDep) -> UploadPipeline:
    return UploadPipeline(storage, chunks, presign_expires=settings.uploads.presign_expires_seconds)


ProfileDep = Annotated[UploadProfile, Depends(get_upload_profile)]
PipelineDep = Annotated[UploadPipeline, Depends(get_upload_pipeline)]


async def get_uploader(profile: ProfileDep, request: Request, session: SessionDep) -> Optional[User]:
    """
    The user behind an upload request.

    Staff-only scopes require an admin or moderator session (401/403);
    public scopes accept anonymous callers and return None for them.
    """
    if not profile.staff_only:
        return await get_optional_user(request, session)
    user = await get_current_user(request, session)
    if not user.is_staff:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user


UploaderDep = Annotated[Optional[User], Depends(get_uploader)]

__all__ = [
    "AdminUser",
    "ChunkStoreDep",
    "CurrentUser",
    "OptionalUser",
    "PageDep",
    "PipelineDep",
    "ProfileDep",
    "SessionDep",
    "SmsDep",
    "StaffUser",
    "StorageDep",
    "UploaderDep",
]

"""
Helpers shared by the content routers.

Slug resolution, publish-time stamping, public identifiers and the
envelope constructors used in every response.
"""

from __future__ import annotations

import secrets
import string
from typing import Any, Dict, Iterable, List, Optional, Type

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from sqlmodel import SQLModel, select

from campaign_portal.core.database.entities.categories import Category
from campaign_portal.core.database.repositories import AsyncRepository
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.categories import CategoryRead
from campaign_portal.core.utils import Pagination, is_valid_slug, slugify, utc_now

_ID_ALPHABET = string.ascii_uppercase + string.digits


def ok(data: Any = None, pagination: Optional[dict] = None, message: Optional[str] = None) -> dict:
    """Success envelope."""
    body: dict = {"success": True, "data": data}
    if pagination is not None:
        body["pagination"] = pagination
    if message:
        body["message"] = message
    return body


def paged(items: list, total: int, page: Pagination) -> dict:
    return ok(items, pagination=page.meta(total))


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


async def get_or_404(session: AsyncSession, model: Type[SQLModel], entity_id: int, what: str):
    entity = await session.get(model, entity_id)
    if entity is None:
        raise not_found(what)
    return entity


async def resolve_slug(
    session: AsyncSession,
    model: Type[SQLModel],
    requested: Optional[str],
    source_text: Optional[str],
    exclude_id: Optional[int] = None,
) -> str:
    """
    Pick the slug for a create/update.

    Uses ``requested`` when given, otherwise slugifies ``source_text``.

    Raises:
        HTTPException: 400 when the slug is malformed or already taken
    """
    slug = (requested or "").strip() or slugify(source_text or "")
    if not is_valid_slug(slug):
        raise bad_request("Slug may only contain lowercase letters, digits and single hyphens")
    if await AsyncRepository(session, model).exists(exclude_id=exclude_id, slug=slug):
        raise bad_request("Slug already exists")
    return slug


def changes(update: BaseModel, *required: str) -> dict:
    """Fields explicitly sent in a PATCH body; ``required`` fields cannot be cleared."""
    data = update.model_dump(exclude_unset=True)
    for name in required:
        if name in data and data[name] is None:
            raise bad_request(f"{name} cannot be empty")
    return data


async def ensure_exists(session: AsyncSession, model: Type[SQLModel], entity_id: Optional[int], what: str) -> None:
    """400 when a referenced row does not exist (None means no reference)."""
    if entity_id is not None and await session.get(model, entity_id) is None:
        raise bad_request(f"Unknown {what}")


def stamp_published(entity: Any, data: dict) -> None:
    """Set ``published_at`` the first time an item becomes published."""
    if data.get("status") == ContentStatus.published and getattr(entity, "published_at", None) is None:
        if data.get("published_at") is None:
            data["published_at"] = utc_now()


def _random_code(length: int) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_tracking_id() -> str:
    """Complaint tracking id, e.g. ``CMP-20240131-7K2Q9X``."""
    return f"CMP-{utc_now():%Y%m%d}-{_random_code(6)}"


def generate_order_number() -> str:
    """Store order number, e.g. ``ORD-20240131-4F8Z``."""
    return f"ORD-{utc_now():%Y%m%d}-{_random_code(4)}"


async def load_by_ids(session: AsyncSession, model: Type[SQLModel], ids: Iterable[Optional[int]]) -> Dict[int, Any]:
    """Fetch the rows of ``model`` for the given ids in one query, keyed by id."""
    wanted = {i for i in ids if i is not None}
    if not wanted:
        return {}
    result = await session.execute(select(model).where(model.id.in_(wanted)))
    return {row.id: row for row in result.scalars().all()}


async def with_categories(
    session: AsyncSession,
    rows: List[Any],
    read_model,
    category_model: Type[SQLModel] = Category,
    category_read=CategoryRead,
) -> list:
    """Build ``read_model`` instances with their ``category`` filled in."""
    categories = await load_by_ids(session, category_model, (row.category_id for row in rows))
    items = []
    for row in rows:
        item = read_model.model_validate(row)
        category = categories.get(row.category_id)
        item.category = category_read.model_validate(category) if category is not None else None
        items.append(item)
    return items

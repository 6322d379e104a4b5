"""
Category routers for the feature-specific taxonomies.

Promises, achievements, testimonials and AMA questions each keep their own
category table with the same shape (bilingual name, slug, order, active
flag). :func:`category_router` builds the console CRUD for one of them.
"""

from typing import Type

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlmodel import SQLModel, select

from campaign_portal.core.database.repositories import AsyncRepository
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.server.services.content import changes, get_or_404, ok, resolve_slug
from campaign_portal.server.services.deps import SessionDep

_REQUIRED = ("name_en", "name_bn", "slug", "display_order", "is_active")


def category_router(
    model: Type[SQLModel],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    read_model: Type[BaseModel],
    label: str,
) -> APIRouter:
    """
    List / create / update / delete endpoints for one category table.

    Args:
        model: Category entity
        create_model: Body of POST
        update_model: Body of PATCH (all fields optional)
        read_model: Response schema
        label: Human name used in messages, e.g. ``"Promise category"``
    """
    router = APIRouter()

    @router.get("", summary=f"List {label} entries")
    async def list_categories(session: SessionDep):
        result = await session.execute(select(model).order_by(model.display_order, model.id))
        return ok([read_model.model_validate(c) for c in result.scalars().all()])

    @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create {label}")
    async def create_category(category_in: create_model, session: SessionDep):
        data = category_in.model_dump()
        data["slug"] = await resolve_slug(session, model, data.get("slug"), data["name_en"])
        category = await AsyncRepository(session, model).create(model(**data))
        return ok(read_model.model_validate(category), message=f"{label} created")

    @router.patch("/{category_id}", summary=f"Update {label}")
    async def update_category(category_id: int, category_in: update_model, session: SessionDep):
        category = await get_or_404(session, model, category_id, label)
        data = changes(category_in, *_REQUIRED)
        if "slug" in data:
            data["slug"] = await resolve_slug(session, model, data["slug"], None, exclude_id=category.id)
        category = await AsyncRepository(session, model).update(category, data)
        return ok(read_model.model_validate(category), message=f"{label} updated")

    @router.delete("/{category_id}", summary=f"Delete {label}")
    async def delete_category(category_id: int, session: SessionDep):
        category = await get_or_404(session, model, category_id, label)
        await AsyncRepository(session, model).delete(category)
        return ok(DeleteResult(id=category_id), message=f"{label} deleted")

    return router

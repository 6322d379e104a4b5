"""Console management of the shared content categories."""

from typing import Optional

from fastapi import APIRouter, status
from sqlmodel import select

from campaign_portal.core.database.entities import Category
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.models.domain.enums import ContentType
from campaign_portal.core.models.io.categories import CategoryCreate, CategoryRead, CategoryUpdate
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.server.services.content import changes, get_or_404, ok, paged, resolve_slug
from campaign_portal.server.services.deps import PageDep, SessionDep

router = APIRouter()


@router.get("", summary="List Categories", description="Every category, active or not.")
async def list_categories(session: SessionDep, page: PageDep, content_type: Optional[ContentType] = None):
    stmt = select(Category)
    if content_type is not None:
        stmt = stmt.where(Category.content_type == content_type)
    stmt = stmt.order_by(Category.content_type, Category.display_order, Category.id)
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged([CategoryRead.model_validate(c) for c in rows], total, page)


@router.get("/{category_id}", summary="Get Category")
async def get_category(category_id: int, session: SessionDep):
    return ok(CategoryRead.model_validate(await get_or_404(session, Category, category_id, "Category")))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
    description="Create a category; the slug is derived from name_en when omitted.",
    responses={400: {"description": "Invalid or duplicate slug"}},
)
async def create_category(category_in: CategoryCreate, session: SessionDep):
    data = category_in.model_dump()
    data["slug"] = await resolve_slug(session, Category, data.get("slug"), category_in.name_en)
    category = await AsyncRepository(session, Category).create(Category(**data))
    return ok(CategoryRead.model_validate(category), message="Category created")


@router.patch("/{category_id}", summary="Update Category", responses={400: {"description": "Invalid or duplicate slug"}})
async def update_category(category_id: int, category_in: CategoryUpdate, session: SessionDep):
    category = await get_or_404(session, Category, category_id, "Category")
    data = changes(category_in, "name_en", "name_bn", "slug", "content_type", "display_order", "is_active")
    if "slug" in data:
        data["slug"] = await resolve_slug(session, Category, data["slug"], None, exclude_id=category.id)
    category = await AsyncRepository(session, Category).update(category, data)
    return ok(CategoryRead.model_validate(category), message="Category updated")


@router.delete("/{category_id}", summary="Delete Category")
async def delete_category(category_id: int, session: SessionDep):
    category = await get_or_404(session, Category, category_id, "Category")
    await AsyncRepository(session, Category).delete(category)
    return ok(DeleteResult(id=category_id), message="Category deleted")

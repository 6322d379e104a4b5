"""
Console News Management.

Drafts and published articles. Slugs are validated and unique, the reading
time is computed from ``content_en`` unless given, and ``published_at`` is
stamped the first time an article is published.
"""

from typing import Optional

from fastapi import APIRouter, status
from sqlalchemy import or_
from sqlmodel import select

from campaign_portal.core.database.entities import Category, NewsArticle
from campaign_portal.core.database.repositories import AsyncRepository, fetch_page
from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.common import DeleteResult
from campaign_portal.core.models.io.news import NewsCreate, NewsRead, NewsUpdate
from campaign_portal.core.utils import calculate_read_time
from campaign_portal.server.services.content import (
    changes,
    ensure_exists,
    get_or_404,
    ok,
    paged,
    resolve_slug,
    stamp_published,
    with_categories,
)
from campaign_portal.server.services.deps import PageDep, SessionDep, StaffUser

logger = get_logger(__name__)
router = APIRouter()

_REQUIRED = ("title_en", "title_bn", "content_en", "content_bn", "slug", "status", "read_time", "is_featured")


async def _read(session, article: NewsArticle) -> NewsRead:
    items = await with_categories(session, [article], NewsRead)
    return items[0]


@router.get("", summary="List News", description="All articles, newest first, with filters.")
async def list_news(
    session: SessionDep,
    page: PageDep,
    status: Optional[ContentStatus] = None,
    category: Optional[int] = None,
    search: Optional[str] = None,
):
    """
    List articles.

    - **status**: draft or published
    - **category**: Category id
    - **search**: Case-insensitive match on either title
    """
    stmt = select(NewsArticle)
    if status is not None:
        stmt = stmt.where(NewsArticle.status == status)
    if category is not None:
        stmt = stmt.where(NewsArticle.category_id == category)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(NewsArticle.title_en.ilike(pattern), NewsArticle.title_bn.ilike(pattern)))
    stmt = stmt.order_by(NewsArticle.created_at.desc(), NewsArticle.id.desc())
    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await with_categories(session, rows, NewsRead), total, page)


@router.get("/{news_id}", summary="Get News Article")
async def get_news(news_id: int, session: SessionDep):
    return ok(await _read(session, await get_or_404(session, NewsArticle, news_id, "News article")))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create News Article",
    responses={400: {"description": "Invalid or duplicate slug, or unknown category"}},
)
async def create_news(news_in: NewsCreate, session: SessionDep, user: StaffUser):
    await ensure_exists(session, Category, news_in.category_id, "category")
    data = news_in.model_dump()
    data["slug"] = await resolve_slug(session, NewsArticle, data.get("slug"), news_in.title_en)
    data["read_time"] = news_in.read_time or calculate_read_time(news_in.content_en)
    stamp_published(None, data)
    article = await AsyncRepository(session, NewsArticle).create(NewsArticle(**data, created_by=user.id))
    logger.info(f"News article {article.id} created by user {user.id}")
    return ok(await _read(session, article), message="News article created")


@router.patch(
    "/{news_id}",
    summary="Update News Article",
    responses={400: {"description": "Invalid or duplicate slug, or unknown category"}},
)
async def update_news(news_id: int, news_in: NewsUpdate, session: SessionDep):
    article = await get_or_404(session, NewsArticle, news_id, "News article")
    data = changes(news_in, *_REQUIRED)
    if "category_id" in data:
        await ensure_exists(session, Category, data["category_id"], "category")
    if "slug" in data:
        data["slug"] = await resolve_slug(session, NewsArticle, data["slug"], None, exclude_id=article.id)
    if "content_en" in data and "read_time" not in data:
        data["read_time"] = calculate_read_time(data["content_en"])
    stamp_published(article, data)
    article = await AsyncRepository(session, NewsArticle).update(article, data)
    return ok(await _read(session, article), message="News article updated")


@router.delete("/{news_id}", summary="Delete News Article")
async def delete_news(news_id: int, session: SessionDep):
    article = await get_or_404(session, NewsArticle, news_id, "News article")
    await AsyncRepository(session, NewsArticle).delete(article)
    logger.info(f"News article {news_id} deleted")
    return ok(DeleteResult(id=news_id), message="News article deleted")

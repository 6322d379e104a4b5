"""
News Endpoints.

Published news articles for the public site, newest first.
"""

from typing import Optional

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Category, NewsArticle
from campaign_portal.core.database.repositories import fetch_page
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.models.io.news import NewsRead
from campaign_portal.server.services.content import not_found, ok, paged, with_categories
from campaign_portal.server.services.deps import PageDep, SessionDep

router = APIRouter()


@router.get(
    "",
    summary="List News",
    description="Published news articles, newest first.",
    response_description="A page of news articles.",
)
async def list_news(
    session: SessionDep,
    page: PageDep,
    category: Optional[int] = None,
    category_slug: Optional[str] = None,
    featured: Optional[bool] = None,
):
    """
    List published news.

    - **category**: Category id
    - **category_slug**: Category slug (alternative to the id)
    - **featured**: Only featured (true) or non-featured (false) articles
    """
    stmt = select(NewsArticle).where(NewsArticle.status == ContentStatus.published)
    if category is not None:
        stmt = stmt.where(NewsArticle.category_id == category)
    if category_slug:
        stmt = stmt.join(Category, Category.id == NewsArticle.category_id).where(Category.slug == category_slug)
    if featured is not None:
        stmt = stmt.where(NewsArticle.is_featured == featured)
    stmt = stmt.order_by(NewsArticle.published_at.desc(), NewsArticle.id.desc())

    rows, total = await fetch_page(session, stmt, page.limit, page.offset)
    return paged(await with_categories(session, rows, NewsRead), total, page)


@router.get(
    "/{slug}",
    summary="Get News Article",
    description="One published news article by slug.",
    response_description="The news article.",
    responses={404: {"description": "News article not found"}},
)
async def get_news(slug: str, session: SessionDep):
    result = await session.execute(
        select(NewsArticle).where(NewsArticle.slug == slug, NewsArticle.status == ContentStatus.published)
    )
    article = result.scalars().first()
    if article is None:
        raise not_found("News article")
    items = await with_categories(session, [article], NewsRead)
    return ok(items[0])

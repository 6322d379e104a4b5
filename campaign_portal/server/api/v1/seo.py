"""
SEO Endpoints.

Page metadata and JSON-LD for published content, and the dynamic part of the
sitemap. The front end renders both into the page head.
"""

from typing import Literal

from fastapi import APIRouter
from sqlmodel import select

from campaign_portal.core.database.entities import Category, Challenge, Event, NewsArticle, Photo, PhotoAlbum
from campaign_portal.core.models.domain.enums import ChallengeStatus, ContentStatus
from campaign_portal.server.services.content import not_found, ok
from campaign_portal.server.services.deps import SessionDep
from campaign_portal.server.services.seo import (
    absolute_url,
    article_json_ld,
    breadcrumb_json_ld,
    build_page_metadata,
    event_json_ld,
    gallery_json_ld,
)

router = APIRouter()


async def _published(session, model, slug: str):
    result = await session.execute(select(model).where(model.slug == slug, model.status == ContentStatus.published))
    return result.scalars().first()


@router.get(
    "/seo/{kind}/{slug}",
    summary="Page Metadata",
    description="Title, description, Open Graph, Twitter card and JSON-LD for a published page.",
    response_description="Metadata and JSON-LD documents.",
    responses={404: {"description": "Content not found"}},
)
async def page_metadata(kind: Literal["news", "events", "albums"], slug: str, session: SessionDep):
    """
    Metadata for one page.

    - **kind**: ``news``, ``events`` or ``albums``
    - **slug**: Slug of a published item
    """
    if kind == "news":
        article = await _published(session, NewsArticle, slug)
        if article is None:
            raise not_found("News article")
        path = f"/news/{article.slug}"
        tags = list(article.keywords or [])
        if article.category_id is not None:
            category = await session.get(Category, article.category_id)
            if category is not None:
                tags.append(category.name_en)
        metadata = build_page_metadata(
            title=article.meta_title_en or article.title_en,
            description=article.meta_description_en or article.excerpt_en or article.content_en,
            path=path,
            image=article.featured_image,
            page_type="article",
            published_time=article.published_at,
            modified_time=article.updated_at,
            tags=tags,
        )
        json_ld = [
            article_json_ld(
                headline=article.title_en,
                description=article.excerpt_en or article.content_en,
                path=path,
                image=article.featured_image,
                published=article.published_at,
                modified=article.updated_at,
                author=article.author_name,
            ),
            breadcrumb_json_ld([("Home", "/"), ("News", "/news"), (article.title_en, path)]),
        ]
    elif kind == "events":
        event = await _published(session, Event, slug)
        if event is None:
            raise not_found("Event")
        path = f"/events/{event.slug}"
        metadata = build_page_metadata(
            title=event.meta_title_en or event.title_en,
            description=event.meta_description_en or event.excerpt_en or event.description_en,
            path=path,
            image=event.featured_image,
            tags=event.keywords or [],
        )
        json_ld = [
            event_json_ld(
                name=event.title_en,
                description=event.excerpt_en or event.description_en,
                path=path,
                start=event.event_date,
                end=event.event_end_date,
                location=event.location_en,
                image=event.featured_image,
            ),
            breadcrumb_json_ld([("Home", "/"), ("Events", "/events"), (event.title_en, path)]),
        ]
    else:
        album = await _published(session, PhotoAlbum, slug)
        if album is None:
            raise not_found("Album")
        path = f"/photo-gallery/{album.slug}"
        photos = await session.execute(
            select(Photo.image_url).where(Photo.album_id == album.id).order_by(Photo.display_order, Photo.id)
        )
        images = list(photos.scalars().all())
        metadata = build_page_metadata(
            title=album.name_en,
            description=album.description_en,
            path=path,
            image=album.cover_image or (images[0] if images else None),
        )
        json_ld = [
            gallery_json_ld(album.name_en, album.description_en, path, images),
            breadcrumb_json_ld([("Home", "/"), ("Photo Gallery", "/photo-gallery"), (album.name_en, path)]),
        ]

    return ok({"metadata": metadata, "json_ld": json_ld})


@router.get(
    "/sitemap/content",
    summary="Sitemap Entries",
    description="Sitemap URLs for every published news article, event, album and public challenge.",
    response_description="List of sitemap entries.",
)
async def sitemap_content(session: SessionDep):
    entries = []

    def add(path: str, last_modified, change_frequency: str, priority: float) -> None:
        entries.append(
            {
                "url": absolute_url(path),
                "last_modified": last_modified.isoformat() + "Z" if last_modified else None,
                "change_frequency": change_frequency,
                "priority": priority,
            }
        )

    news = await session.execute(
        select(NewsArticle).where(NewsArticle.status == ContentStatus.published).order_by(NewsArticle.published_at.desc())
    )
    for article in news.scalars().all():
        add(f"/news/{article.slug}", article.updated_at, "weekly", 0.7)

    events = await session.execute(
        select(Event).where(Event.status == ContentStatus.published).order_by(Event.event_date.desc())
    )
    for event in events.scalars().all():
        add(f"/events/{event.slug}", event.updated_at, "weekly", 0.6)

    albums = await session.execute(
        select(PhotoAlbum).where(PhotoAlbum.status == ContentStatus.published).order_by(PhotoAlbum.created_at.desc())
    )
    for album in albums.scalars().all():
        add(f"/photo-gallery/{album.slug}", album.updated_at, "monthly", 0.5)

    challenges = await session.execute(
        select(Challenge)
        .where(Challenge.status.in_((ChallengeStatus.active, ChallengeStatus.closed)))
        .order_by(Challenge.created_at.desc())
    )
    for challenge in challenges.scalars().all():
        add(f"/challenges/{challenge.id}", challenge.updated_at, "daily", 0.6)

    return ok(entries)

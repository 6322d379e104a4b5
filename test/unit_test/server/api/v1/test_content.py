"""Public categories, news and events."""

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from campaign_portal.core.database.entities import Category, Event, NewsArticle
from campaign_portal.core.models.domain.enums import ContentStatus, ContentType
from campaign_portal.core.utils import utc_now

pytestmark = pytest.mark.asyncio


def _article(slug: str, status=ContentStatus.published, **kwargs) -> NewsArticle:
    return NewsArticle(
        title_en=slug.replace("-", " ").title(),
        title_bn="শিরোনাম",
        content_en="word " * 10,
        content_bn="শব্দ",
        slug=slug,
        status=status,
        **kwargs,
    )


def _event(slug: str, days: int, status=ContentStatus.published, **kwargs) -> Event:
    return Event(
        title_en=slug,
        title_bn=slug,
        description_en="desc",
        description_bn="desc",
        event_date=utc_now() + timedelta(days=days),
        slug=slug,
        status=status,
        **kwargs,
    )


@pytest_asyncio.fixture
async def categories(session):
    rows = {
        "politics": Category(name_en="Politics", name_bn="রাজনীতি", slug="politics", content_type=ContentType.news, display_order=2),
        "health": Category(name_en="Health", name_bn="স্বাস্থ্য", slug="health", content_type=ContentType.news, display_order=1),
        "rallies": Category(name_en="Rallies", name_bn="সমাবেশ", slug="rallies", content_type=ContentType.events),
        "hidden": Category(
            name_en="Hidden", name_bn="লুকানো", slug="hidden", content_type=ContentType.news, is_active=False
        ),
    }
    session.add_all(rows.values())
    await session.commit()
    return rows


class TestCategories:
    async def test_only_active_in_display_order(self, client: AsyncClient, categories):
        response = await client.get("/api/v1/categories")
        slugs = [c["slug"] for c in response.json()["data"]]
        assert slugs == ["rallies", "health", "politics"]

    async def test_filter_by_content_type(self, client: AsyncClient, categories):
        response = await client.get("/api/v1/categories", params={"content_type": "events"})
        assert [c["slug"] for c in response.json()["data"]] == ["rallies"]

    async def test_unknown_content_type(self, client: AsyncClient):
        response = await client.get("/api/v1/categories", params={"content_type": "podcasts"})
        assert response.status_code == 400


class TestNews:
    async def test_lists_published_newest_first(self, client: AsyncClient, session, categories):
        now = utc_now()
        session.add_all(
            [
                _article("older", published_at=now - timedelta(days=2), category_id=categories["health"].id),
                _article("newer", published_at=now - timedelta(days=1), is_featured=True),
                _article("draft-piece", status=ContentStatus.draft),
            ]
        )
        await session.commit()

        response = await client.get("/api/v1/news")
        body = response.json()

        assert body["success"] is True
        assert [a["slug"] for a in body["data"]] == ["newer", "older"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 2, "total_pages": 1}
        assert body["data"][1]["category"]["slug"] == "health"
        assert body["data"][0]["category"] is None

    async def test_filters(self, client: AsyncClient, session, categories):
        session.add_all(
            [
                _article("a", category_id=categories["health"].id, published_at=utc_now()),
                _article("b", category_id=categories["politics"].id, is_featured=True, published_at=utc_now()),
            ]
        )
        await session.commit()

        by_id = await client.get("/api/v1/news", params={"category": categories["health"].id})
        assert [a["slug"] for a in by_id.json()["data"]] == ["a"]
        by_slug = await client.get("/api/v1/news", params={"category_slug": "politics"})
        assert [a["slug"] for a in by_slug.json()["data"]] == ["b"]
        featured = await client.get("/api/v1/news", params={"featured": "true"})
        assert [a["slug"] for a in featured.json()["data"]] == ["b"]

    async def test_pagination(self, client: AsyncClient, session):
        session.add_all([_article(f"post-{n}", published_at=utc_now() - timedelta(hours=n)) for n in range(5)])
        await session.commit()

        response = await client.get("/api/v1/news", params={"page": 2, "limit": 2})
        body = response.json()
        assert [a["slug"] for a in body["data"]] == ["post-2", "post-3"]
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "total_pages": 3}

    async def test_get_by_slug(self, client: AsyncClient, session):
        session.add_all([_article("visible", published_at=utc_now()), _article("secret", status=ContentStatus.draft)])
        await session.commit()

        assert (await client.get("/api/v1/news/visible")).json()["data"]["title_en"] == "Visible"
        missing = await client.get("/api/v1/news/secret")
        assert missing.status_code == 404
        assert missing.json() == {"success": False, "error": "News article not found"}


class TestEvents:
    @pytest_asyncio.fixture
    async def events(self, session):
        session.add_all(
            [
                _event("next-week", 7),
                _event("tomorrow", 1),
                _event("last-month", -30),
                _event("yesterday", -1),
                _event("draft-rally", 3, status=ContentStatus.draft),
            ]
        )
        await session.commit()

    async def test_upcoming_ascending(self, client: AsyncClient, events):
        response = await client.get("/api/v1/events", params={"filter": "upcoming"})
        assert [e["slug"] for e in response.json()["data"]] == ["tomorrow", "next-week"]

    async def test_past_descending(self, client: AsyncClient, events):
        response = await client.get("/api/v1/events", params={"filter": "past"})
        assert [e["slug"] for e in response.json()["data"]] == ["yesterday", "last-month"]

    async def test_all_descending(self, client: AsyncClient, events):
        response = await client.get("/api/v1/events")
        assert [e["slug"] for e in response.json()["data"]] == ["next-week", "tomorrow", "yesterday", "last-month"]

    async def test_get_by_slug(self, client: AsyncClient, events):
        assert (await client.get("/api/v1/events/tomorrow")).status_code == 200
        assert (await client.get("/api/v1/events/draft-rally")).status_code == 404

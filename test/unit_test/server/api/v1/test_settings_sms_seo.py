"""Public site settings, staff SMS sending and SEO metadata."""

from datetime import timedelta
from typing import List

import httpx
import pytest
from httpx import AsyncClient

from campaign_portal.core.database.entities import Event, NewsArticle, Photo, PhotoAlbum, SiteSetting
from campaign_portal.core.models.domain.enums import ContentStatus
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core.config import settings

pytestmark = pytest.mark.asyncio


class TestSiteSettings:
    async def test_public_settings_of_one_category(self, client: AsyncClient, session):
        session.add_all(
            [
                SiteSetting(key="facebook_url", value="https://facebook.com/campaign", category="social"),
                SiteSetting(key="hotline", value={"number": "16000"}, category="social"),
                SiteSetting(key="internal_note", value="x", category="social", is_public=False),
                SiteSetting(key="site_title", value="Campaign", category="general"),
            ]
        )
        await session.commit()
        data = (await client.get("/api/v1/settings/social")).json()["data"]
        assert data == {"facebook_url": "https://facebook.com/campaign", "hotline": {"number": "16000"}}

    async def test_unknown_category_is_empty(self, client: AsyncClient):
        assert (await client.get("/api/v1/settings/nothing")).json()["data"] == {}


class TestSms:
    async def test_requires_staff(self, client: AsyncClient, user_client: AsyncClient):
        payload = {"phone": "01712345678", "message": "Hello"}
        assert (await client.post("/api/v1/sms/send", json=payload)).status_code == 401
        assert (await user_client.post("/api/v1/sms/send", json=payload)).status_code == 403

    async def test_sends_through_gateway(self, staff_client: AsyncClient, sms_requests: List[httpx.Request]):
        response = await staff_client.post("/api/v1/sms/send", json={"phone": "+88 017-1234-5678", "message": "সভা আজ"})
        assert response.status_code == 200
        body = response.json()
        assert body["data"]["to"] == "8801712345678"
        assert body["data"]["gateway_response"]["message_id"] == "m-1"
        assert body["message"] == "SMS sent"
        assert len(sms_requests) == 1

    async def test_invalid_phone(self, staff_client: AsyncClient, sms_requests: List[httpx.Request]):
        response = await staff_client.post("/api/v1/sms/send", json={"phone": "12345", "message": "Hello"})
        assert response.status_code == 400
        assert sms_requests == []


def _article(slug: str, status=ContentStatus.published) -> NewsArticle:
    return NewsArticle(
        title_en="Road Repairs Begin",
        title_bn="সড়ক মেরামত",
        content_en="Work starts on Monday.",
        content_bn="কাজ শুরু",
        excerpt_en="Repairs start",
        slug=slug,
        status=status,
        published_at=utc_now() - timedelta(days=1),
        featured_image="/images/road.jpg",
        keywords=["roads"],
    )


class TestSeo:
    async def test_news_metadata(self, client: AsyncClient, session):
        session.add(_article("road-repairs"))
        await session.commit()
        data = (await client.get("/api/v1/seo/news/road-repairs")).json()["data"]
        metadata = data["metadata"]
        site = settings.site
        assert metadata["title"] == f"Road Repairs Begin | {site.short_name}"
        assert metadata["description"] == "Repairs start"
        assert metadata["canonical"] == f"{site.url.rstrip('/')}/news/road-repairs"
        assert metadata["open_graph"]["type"] == "article"
        assert metadata["open_graph"]["images"][0]["url"].endswith("/images/road.jpg")
        assert [doc["@type"] for doc in data["json_ld"]] == ["NewsArticle", "BreadcrumbList"]

    async def test_draft_is_not_found(self, client: AsyncClient, session):
        session.add(_article("draft-news", status=ContentStatus.draft))
        await session.commit()
        assert (await client.get("/api/v1/seo/news/draft-news")).status_code == 404

    async def test_unknown_kind(self, client: AsyncClient):
        assert (await client.get("/api/v1/seo/podcasts/x")).status_code == 400

    async def test_event_and_album(self, client: AsyncClient, session):
        session.add(
            Event(
                title_en="Town Hall",
                title_bn="সভা",
                description_en="Meet the candidate",
                description_bn="সভা",
                event_date=utc_now() + timedelta(days=3),
                location_en="Community Centre",
                slug="town-hall",
                status=ContentStatus.published,
            )
        )
        album = PhotoAlbum(name_en="Rally", name_bn="সমাবেশ", slug="rally", status=ContentStatus.published)
        session.add(album)
        await session.flush()
        session.add(Photo(album_id=album.id, image_url="https://cdn.test/media/images/rally-1.jpg"))
        await session.commit()

        event = (await client.get("/api/v1/seo/events/town-hall")).json()["data"]
        assert event["json_ld"][0]["location"]["name"] == "Community Centre"
        assert event["json_ld"][0]["endDate"] == event["json_ld"][0]["startDate"]

        gallery = (await client.get("/api/v1/seo/albums/rally")).json()["data"]
        assert gallery["json_ld"][0]["image"] == ["https://cdn.test/media/images/rally-1.jpg"]
        assert gallery["metadata"]["open_graph"]["images"][0]["url"] == "https://cdn.test/media/images/rally-1.jpg"

    async def test_sitemap_lists_published_content(self, client: AsyncClient, session):
        session.add_all([_article("road-repairs"), _article("draft-news", status=ContentStatus.draft)])
        await session.commit()
        entries = (await client.get("/api/v1/sitemap/content")).json()["data"]
        assert [e["url"] for e in entries] == [f"{settings.site.url.rstrip('/')}/news/road-repairs"]
        assert entries[0]["change_frequency"] == "weekly"

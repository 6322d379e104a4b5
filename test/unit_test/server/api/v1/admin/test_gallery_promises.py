"""Console gallery and promise tracker."""

import pytest
from httpx import AsyncClient

from campaign_portal.core.database.entities import Promise
from campaign_portal.core.models.domain.enums import PromiseStatus
from campaign_portal.server.api.v1.admin.promises import apply_progress

ALBUM = {"name_en": "Victory Rally", "name_bn": "বিজয় সমাবেশ"}


async def _album(client: AsyncClient, **overrides) -> int:
    response = await client.post("/api/v1/admin/photo-gallery/albums", json={**ALBUM, **overrides})
    return response.json()["data"]["id"]


async def _photo_count(client: AsyncClient, album_id: int) -> int:
    return (await client.get(f"/api/v1/admin/photo-gallery/albums/{album_id}")).json()["data"]["photo_count"]


@pytest.mark.asyncio
class TestGallery:
    async def test_photo_count_follows_photos(self, staff_client: AsyncClient):
        first = await _album(staff_client)
        second = await _album(staff_client, slug="second-rally")

        photo_ids = []
        for n in range(2):
            response = await staff_client.post(
                "/api/v1/admin/photo-gallery/photos", json={"image_url": f"https://cdn.test/{n}.jpg", "album_id": first}
            )
            assert response.status_code == 201
            photo_ids.append(response.json()["data"]["id"])
        assert await _photo_count(staff_client, first) == 2

        await staff_client.patch(f"/api/v1/admin/photo-gallery/photos/{photo_ids[0]}", json={"album_id": second})
        assert await _photo_count(staff_client, first) == 1
        assert await _photo_count(staff_client, second) == 1

        await staff_client.delete(f"/api/v1/admin/photo-gallery/photos/{photo_ids[1]}")
        assert await _photo_count(staff_client, first) == 0

    async def test_photo_in_unknown_album(self, staff_client: AsyncClient):
        response = await staff_client.post(
            "/api/v1/admin/photo-gallery/photos", json={"image_url": "https://cdn.test/x.jpg", "album_id": 404}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Unknown album"

    async def test_album_detail_and_delete(self, staff_client: AsyncClient):
        album_id = await _album(staff_client)
        await staff_client.post(
            "/api/v1/admin/photo-gallery/photos",
            json={"image_url": "https://cdn.test/b.jpg", "album_id": album_id, "display_order": 2},
        )
        await staff_client.post(
            "/api/v1/admin/photo-gallery/photos",
            json={"image_url": "https://cdn.test/a.jpg", "album_id": album_id, "display_order": 1},
        )
        detail = (await staff_client.get(f"/api/v1/admin/photo-gallery/albums/{album_id}")).json()["data"]
        assert [p["image_url"] for p in detail["photos"]] == ["https://cdn.test/a.jpg", "https://cdn.test/b.jpg"]

        assert (await staff_client.delete(f"/api/v1/admin/photo-gallery/albums/{album_id}")).status_code == 200
        photos = (await staff_client.get("/api/v1/admin/photo-gallery/photos", params={"album_id": album_id})).json()
        assert photos["data"] == []

    async def test_video_youtube_id(self, staff_client: AsyncClient):
        response = await staff_client.post(
            "/api/v1/admin/video-gallery",
            json={"title_en": "Speech", "title_bn": "বক্তৃতা", "youtube_url": "https://youtu.be/dQw4w9WgXcQ"},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["youtube_id"] == "dQw4w9WgXcQ"
        assert "dQw4w9WgXcQ" in data["thumbnail_url"]

        updated = await staff_client.patch(
            f"/api/v1/admin/video-gallery/{data['id']}",
            json={"youtube_url": "https://www.youtube.com/watch?v=9bZkp7q19f0", "custom_thumbnail": "/thumb.jpg"},
        )
        assert updated.json()["data"]["youtube_id"] == "9bZkp7q19f0"
        assert updated.json()["data"]["thumbnail_url"] == "/thumb.jpg"

    async def test_invalid_youtube_url(self, staff_client: AsyncClient):
        response = await staff_client.post(
            "/api/v1/admin/video-gallery",
            json={"title_en": "Speech", "title_bn": "বক্তৃতা", "youtube_url": "https://vimeo.com/123"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid YouTube URL"


@pytest.mark.parametrize(
    "start_status,progress,expected",
    [
        (PromiseStatus.not_started, 40, PromiseStatus.in_progress),
        (PromiseStatus.delayed, 40, PromiseStatus.in_progress),
        (PromiseStatus.delayed, 0, PromiseStatus.delayed),
        (PromiseStatus.completed, 60, PromiseStatus.in_progress),
        (PromiseStatus.in_progress, 100, PromiseStatus.completed),
        (PromiseStatus.not_started, 0, PromiseStatus.not_started),
    ],
)
def test_apply_progress(start_status, progress, expected):
    promise = Promise(title_en="p", title_bn="p", status=start_status)
    apply_progress(promise, progress)
    assert promise.status == expected
    assert promise.progress == progress
    assert (promise.completion_date is not None) == (progress == 100)


@pytest.mark.asyncio
class TestPromises:
    async def test_category_route_is_not_a_promise_id(self, staff_client: AsyncClient):
        created = await staff_client.post(
            "/api/v1/admin/promises/categories", json={"name_en": "Roads & Bridges", "name_bn": "সড়ক"}
        )
        assert created.status_code == 201
        assert created.json()["data"]["slug"] == "roads-bridges"
        listed = await staff_client.get("/api/v1/admin/promises/categories")
        assert [c["slug"] for c in listed.json()["data"]] == ["roads-bridges"]

    async def test_update_moves_progress(self, staff_client: AsyncClient):
        promise_id = (
            await staff_client.post("/api/v1/admin/promises", json={"title_en": "New bridge", "title_bn": "সেতু"})
        ).json()["data"]["id"]

        await staff_client.post(
            f"/api/v1/admin/promises/{promise_id}/updates", json={"title_en": "Piling done", "new_progress": 45}
        )
        promise = (await staff_client.get(f"/api/v1/admin/promises/{promise_id}")).json()["data"]
        assert promise["progress"] == 45
        assert promise["status"] == "in_progress"

        await staff_client.post(
            f"/api/v1/admin/promises/{promise_id}/updates", json={"title_en": "Opened", "new_progress": 100}
        )
        promise = (await staff_client.get(f"/api/v1/admin/promises/{promise_id}")).json()["data"]
        assert promise["status"] == "completed"
        assert promise["completion_date"] is not None

        updates = (await staff_client.get(f"/api/v1/admin/promises/{promise_id}/updates")).json()["data"]
        assert [u["title_en"] for u in updates] == ["Opened", "Piling done"]

    async def test_update_without_progress_keeps_promise(self, staff_client: AsyncClient):
        promise_id = (
            await staff_client.post("/api/v1/admin/promises", json={"title_en": "Clinic", "title_bn": "ক্লিনিক"})
        ).json()["data"]["id"]
        await staff_client.post(f"/api/v1/admin/promises/{promise_id}/updates", json={"title_en": "Site visit"})
        promise = (await staff_client.get(f"/api/v1/admin/promises/{promise_id}")).json()["data"]
        assert promise["progress"] == 0
        assert promise["status"] == "not_started"

    async def test_marking_completed_stamps_date(self, staff_client: AsyncClient):
        promise_id = (
            await staff_client.post("/api/v1/admin/promises", json={"title_en": "Park", "title_bn": "পার্ক"})
        ).json()["data"]["id"]
        response = await staff_client.patch(f"/api/v1/admin/promises/{promise_id}", json={"status": "completed"})
        assert response.json()["data"]["completion_date"] is not None

    async def test_unknown_category(self, staff_client: AsyncClient):
        response = await staff_client.post(
            "/api/v1/admin/promises", json={"title_en": "X", "title_bn": "X", "category_id": 77}
        )
        assert response.status_code == 400

    async def test_delete_update_of_other_promise(self, staff_client: AsyncClient):
        first = (await staff_client.post("/api/v1/admin/promises", json={"title_en": "A", "title_bn": "A"})).json()
        second = (await staff_client.post("/api/v1/admin/promises", json={"title_en": "B", "title_bn": "B"})).json()
        update = await staff_client.post(
            f"/api/v1/admin/promises/{first['data']['id']}/updates", json={"title_en": "Note"}
        )
        update_id = update.json()["data"]["id"]
        response = await staff_client.delete(f"/api/v1/admin/promises/{second['data']['id']}/updates/{update_id}")
        assert response.status_code == 404

    async def test_delete_removes_updates(self, staff_client: AsyncClient):
        promise_id = (
            await staff_client.post("/api/v1/admin/promises", json={"title_en": "Road", "title_bn": "সড়ক"})
        ).json()["data"]["id"]
        await staff_client.post(f"/api/v1/admin/promises/{promise_id}/updates", json={"title_en": "Note"})
        assert (await staff_client.delete(f"/api/v1/admin/promises/{promise_id}")).status_code == 200
        assert (await staff_client.get(f"/api/v1/admin/promises/{promise_id}/updates")).status_code == 404

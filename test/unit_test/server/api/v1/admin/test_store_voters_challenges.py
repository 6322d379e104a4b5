"""Console store, voter roll and challenges."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from campaign_portal.core.utils import utc_now

pytestmark = pytest.mark.asyncio

PRODUCT = {
    "name_en": "Campaign T-Shirt",
    "name_bn": "টি-শার্ট",
    "price": 450,
    "variants": [{"name": "Small", "size": "S"}, {"name": "Large", "size": "L", "price": 500}],
}


class TestProducts:
    async def test_create_with_variants(self, staff_client: AsyncClient):
        response = await staff_client.post("/api/v1/admin/store/products", json=PRODUCT)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "campaign-t-shirt"
        assert [v["name"] for v in data["variants"]] == ["Small", "Large"]

    async def test_variants_are_replaced(self, staff_client: AsyncClient):
        product_id = (await staff_client.post("/api/v1/admin/store/products", json=PRODUCT)).json()["data"]["id"]
        response = await staff_client.patch(
            f"/api/v1/admin/store/products/{product_id}",
            json={"variants": [{"name": "One Size", "is_active": False}], "price": 400},
        )
        data = response.json()["data"]
        assert data["price"] == 400
        assert [v["name"] for v in data["variants"]] == ["One Size"]

    async def test_price_cannot_be_cleared(self, staff_client: AsyncClient):
        product_id = (await staff_client.post("/api/v1/admin/store/products", json=PRODUCT)).json()["data"]["id"]
        response = await staff_client.patch(f"/api/v1/admin/store/products/{product_id}", json={"price": None})
        assert response.status_code == 400

    async def test_order_fulfilment(self, staff_client: AsyncClient, client: AsyncClient):
        product = (await staff_client.post("/api/v1/admin/store/products", json=PRODUCT)).json()["data"]
        placed = await client.post(
            "/api/v1/store/orders",
            json={
                "customer_name": "Rahim",
                "customer_phone": "01712345678",
                "customer_address": "Road 5",
                "items": [{"product_id": product["id"], "quantity": 1}],
            },
        )
        order = placed.json()["data"]

        listed = (await staff_client.get("/api/v1/admin/store/orders", params={"search": "Rahim"})).json()
        assert [o["id"] for o in listed["data"]] == [order["id"]]

        shipped = await staff_client.patch(f"/api/v1/admin/store/orders/{order['id']}", json={"status": "shipped"})
        assert shipped.json()["data"]["status"] == "shipped"
        assert shipped.json()["data"]["items"][0]["product_name"] == "Campaign T-Shirt"


class TestVoters:
    async def _area(self, client: AsyncClient, number: str = "0101") -> int:
        response = await client.post(
            "/api/v1/admin/voter-metadata", json={"voter_area_name": "Uttar Para", "voter_area_no": number}
        )
        return response.json()["data"]["id"]

    async def test_import_and_list(self, staff_client: AsyncClient):
        area_id = await self._area(staff_client)
        voters = [
            {"voter_metadata_id": area_id, "serial_no": n, "voter_no": f"V-{n}", "voter_name": f"Voter {n}",
             "date_of_birth": "1980-05-17"}
            for n in (2, 1)
        ]
        imported = await staff_client.post("/api/v1/admin/voters/import", json={"voters": voters})
        assert imported.status_code == 201
        assert imported.json()["data"]["inserted"] == 2

        listed = (await staff_client.get("/api/v1/admin/voters", params={"voter_metadata_id": area_id})).json()
        assert [v["serial_no"] for v in listed["data"]] == [1, 2]

    async def test_import_into_unknown_area(self, staff_client: AsyncClient):
        voters = [{"voter_metadata_id": 99, "serial_no": 1, "voter_no": "V", "voter_name": "X", "date_of_birth": "1980-01-01"}]
        response = await staff_client.post("/api/v1/admin/voters/import", json={"voters": voters})
        assert response.status_code == 400
        assert response.json()["error"] == "Unknown voter area: 99"

    async def test_deleting_area_removes_voters(self, staff_client: AsyncClient):
        area_id = await self._area(staff_client)
        voters = [{"voter_metadata_id": area_id, "serial_no": 1, "voter_no": "V", "voter_name": "X", "date_of_birth": "1980-01-01"}]
        await staff_client.post("/api/v1/admin/voters/import", json={"voters": voters})
        assert (await staff_client.delete(f"/api/v1/admin/voter-metadata/{area_id}")).status_code == 200
        assert (await staff_client.get("/api/v1/admin/voters")).json()["pagination"]["total"] == 0


class TestChallenges:
    def _challenge(self, **overrides):
        now = utc_now()
        return {
            "title_en": "Clean Streets",
            "title_bn": "পরিষ্কার রাস্তা",
            "status": "active",
            "start_date": (now - timedelta(days=1)).isoformat(),
            "end_date": (now + timedelta(days=7)).isoformat(),
            **overrides,
        }

    async def test_window_must_be_ordered(self, staff_client: AsyncClient):
        now = utc_now()
        response = await staff_client.post(
            "/api/v1/admin/challenges",
            json=self._challenge(start_date=now.isoformat(), end_date=(now - timedelta(days=1)).isoformat()),
        )
        assert response.status_code == 400

    async def test_winner_toggle_and_counts(self, staff_client: AsyncClient, client: AsyncClient):
        created = await staff_client.post("/api/v1/admin/challenges", json=self._challenge())
        challenge = created.json()["data"]
        assert challenge["computed_status"] == "active"
        assert challenge["submission_count"] == 0

        entry = await client.post(
            "/api/v1/challenges/submit",
            json={"challenge_id": challenge["id"], "mobile": "01712345678", "description": "Swept road 4"},
        )
        submission_id = entry.json()["data"]["id"]

        marked = await staff_client.post(f"/api/v1/admin/challenges/submissions/{submission_id}/winner")
        assert marked.json()["data"]["is_winner"] is True
        winners = (await client.get(f"/api/v1/challenges/{challenge['id']}")).json()["data"]["winners"]
        assert [w["id"] for w in winners] == [submission_id]

        unmarked = await staff_client.post(f"/api/v1/admin/challenges/submissions/{submission_id}/winner")
        assert unmarked.json()["data"]["is_winner"] is False

        detail = (await staff_client.get(f"/api/v1/admin/challenges/{challenge['id']}")).json()["data"]
        assert detail["submission_count"] == 1

    async def test_delete_removes_submissions(self, staff_client: AsyncClient, client: AsyncClient):
        challenge_id = (await staff_client.post("/api/v1/admin/challenges", json=self._challenge())).json()["data"]["id"]
        await client.post(
            "/api/v1/challenges/submit",
            json={"challenge_id": challenge_id, "mobile": "01712345678", "description": "entry"},
        )
        assert (await staff_client.delete(f"/api/v1/admin/challenges/{challenge_id}")).status_code == 200
        assert (await staff_client.get(f"/api/v1/admin/challenges/{challenge_id}/submissions")).status_code == 404

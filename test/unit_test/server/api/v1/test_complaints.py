import re

import pytest
from httpx import AsyncClient
from sqlmodel import select

from campaign_portal.core.database.entities import Complaint
from campaign_portal.core.models.domain.enums import ComplaintStatus
from campaign_portal.server.api.v1.complaints import normalize_ward

pytestmark = pytest.mark.asyncio

COMPLAINT = {
    "ward": "1",
    "category": "roads",
    "subject": "Broken streetlight",
    "message": "The streetlight on road 4 has been out for a week.",
    "name": "Tania",
    "email": "tania@example.org",
    "phone": "01712345678",
}


@pytest.mark.parametrize("raw,expected", [("1", "01"), (" 17 ", "17"), ("01", "01"), ("North", "North")])
async def test_normalize_ward(raw, expected):
    assert normalize_ward(raw) == expected


async def test_file_and_track(client: AsyncClient):
    response = await client.post("/api/v1/complaints", json=COMPLAINT)
    assert response.status_code == 201
    data = response.json()["data"]
    assert re.fullmatch(r"CMP-\d{8}-[A-Z0-9]{6}", data["tracking_id"])
    assert data["ward"] == "01"
    assert data["status"] == "pending"
    assert data["tracking_id"] in response.json()["message"]

    tracked = await client.get("/api/v1/complaints", params={"tracking_id": data["tracking_id"].lower()})
    assert tracked.status_code == 200
    assert tracked.json()["data"]["subject"] == "Broken streetlight"
    assert "email" not in tracked.json()["data"]


async def test_unknown_tracking_id(client: AsyncClient):
    response = await client.get("/api/v1/complaints", params={"tracking_id": "CMP-00000000-XXXXXX"})
    assert response.status_code == 404
    assert response.json()["error"] == "Complaint not found"


async def test_invalid_ward(client: AsyncClient):
    response = await client.post("/api/v1/complaints", json={**COMPLAINT, "ward": "99"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid ward"


async def test_identity_required_unless_anonymous(client: AsyncClient, session):
    missing = await client.post("/api/v1/complaints", json={**COMPLAINT, "email": None})
    assert missing.status_code == 400

    anonymous = await client.post("/api/v1/complaints", json={**COMPLAINT, "email": None, "is_anonymous": True})
    assert anonymous.status_code == 201
    stored = (await session.execute(select(Complaint))).scalars().one()
    assert stored.name is None and stored.phone is None


async def test_stats(client: AsyncClient, session):
    def complaint(n, ward, status):
        return Complaint(
            tracking_id=f"CMP-T-{n}", ward=ward, category="c", subject="s", message="m", status=status
        )

    session.add_all(
        [
            complaint(1, "01", ComplaintStatus.resolved),
            complaint(2, "01", ComplaintStatus.pending),
            complaint(3, "01", ComplaintStatus.pending),
            complaint(4, "17", ComplaintStatus.resolved),
        ]
    )
    await session.commit()

    stats = (await client.get("/api/v1/complaints/stats")).json()["data"]
    wards = {w["ward"]: w for w in stats["wards"]}

    assert wards["01"]["total"] == 3
    assert wards["01"]["pending"] == 2
    assert wards["01"]["intensity"] == 1.0
    assert wards["17"]["intensity"] == 0.33
    assert wards["43"]["total"] == 0
    assert stats["summary"] == {
        "total": 4,
        "resolved": 2,
        "pending": 2,
        "resolution_rate": 50,
        "most_active_ward": "01",
    }


async def test_stats_when_empty(client: AsyncClient):
    summary = (await client.get("/api/v1/complaints/stats")).json()["data"]["summary"]
    assert summary["total"] == 0
    assert summary["most_active_ward"] is None

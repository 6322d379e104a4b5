import pytest
from httpx import AsyncClient

from campaign_portal.core.database.entities import EmergencyContact

pytestmark = pytest.mark.asyncio


async def test_contact_message(client: AsyncClient):
    response = await client.post(
        "/api/v1/contact",
        json={"name": "Mina", "email": "mina@example.org", "subject": "Meeting", "message": "Can we meet?"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "pending"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Mina", "email": "not-an-email", "subject": "s", "message": "m"},
        {"name": "", "email": "mina@example.org", "subject": "s", "message": "m"},
        {"name": "Mina", "email": "mina@example.org", "subject": "s"},
    ],
)
async def test_contact_validation(client: AsyncClient, payload):
    assert (await client.post("/api/v1/contact", json=payload)).status_code == 400


async def test_sos_defaults(client: AsyncClient):
    response = await client.post("/api/v1/emergency/sos", json={"phone": "01712345678", "name": "  ", "request_type": ""})
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Anonymous"
    assert data["request_type"] == "general"
    assert data["priority"] == "high"
    assert data["status"] == "pending"


async def test_sos_with_location_and_audio(client: AsyncClient):
    response = await client.post(
        "/api/v1/emergency/sos",
        json={
            "phone": "01712345678",
            "request_type": "medical",
            "latitude": 23.78,
            "longitude": 90.41,
            "audio_url": "https://cdn.test/emergency-audio/2025/01/01/a.webm",
            "audio_duration": 12,
            "priority": "urgent",
        },
    )
    data = response.json()["data"]
    assert data["request_type"] == "medical"
    assert data["audio_duration"] == 12
    assert data["priority"] == "urgent"


async def test_sos_rejects_bad_coordinates(client: AsyncClient):
    response = await client.post("/api/v1/emergency/sos", json={"phone": "01712345678", "latitude": 123})
    assert response.status_code == 400


async def test_emergency_contacts(client: AsyncClient, session):
    session.add_all(
        [
            EmergencyContact(name_en="Police", name_bn="পুলিশ", phone="999", display_order=2),
            EmergencyContact(name_en="Fire", name_bn="ফায়ার", phone="16163", display_order=1),
            EmergencyContact(name_en="Closed", name_bn="বন্ধ", phone="0", is_active=False),
        ]
    )
    await session.commit()
    body = (await client.get("/api/v1/emergency/contacts")).json()
    assert [c["name_en"] for c in body["data"]] == ["Fire", "Police"]

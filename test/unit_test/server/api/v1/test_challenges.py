from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from campaign_portal.core.database.entities import Challenge, ChallengeSubmission
from campaign_portal.core.models.domain.enums import ChallengeStatus
from campaign_portal.core.utils import utc_now
from campaign_portal.server.api.v1.challenges import computed_status


def _challenge(title: str, start_days: int, end_days: int, status=ChallengeStatus.active) -> Challenge:
    now = utc_now()
    return Challenge(
        title_en=title,
        title_bn=title,
        start_date=now + timedelta(days=start_days),
        end_date=now + timedelta(days=end_days),
        status=status,
    )


@pytest_asyncio.fixture
async def challenges(session):
    rows = {
        "running": _challenge("Running", -1, 5),
        "soon": _challenge("Soon", 2, 9),
        "over": _challenge("Over", -9, -2),
        "draft": _challenge("Draft", -1, 5, ChallengeStatus.draft),
        "archived": _challenge("Archived", -1, 5, ChallengeStatus.archived),
    }
    session.add_all(rows.values())
    await session.commit()
    return rows


@pytest.mark.parametrize(
    "start,end,status,expected",
    [
        (-1, 1, ChallengeStatus.active, "active"),
        (1, 2, ChallengeStatus.active, "upcoming"),
        (-2, -1, ChallengeStatus.active, "ended"),
        (-1, 1, ChallengeStatus.closed, "closed"),
    ],
)
def test_computed_status(start, end, status, expected):
    assert computed_status(_challenge("c", start, end, status)) == expected


@pytest.mark.asyncio
async def test_list_hides_archived(client: AsyncClient, challenges):
    body = (await client.get("/api/v1/challenges")).json()
    statuses = {c["title_en"]: c["computed_status"] for c in body["data"]}
    assert statuses == {"Running": "active", "Soon": "upcoming", "Over": "ended", "Draft": "draft"}
    assert body["pagination"]["total"] == 4


@pytest.mark.asyncio
async def test_list_filters_on_computed_status(client: AsyncClient, challenges):
    body = (await client.get("/api/v1/challenges", params={"status": "upcoming"})).json()
    assert [c["title_en"] for c in body["data"]] == ["Soon"]


@pytest.mark.asyncio
async def test_detail_lists_winners_without_contact(client: AsyncClient, session, challenges):
    over = challenges["over"]
    session.add_all(
        [
            ChallengeSubmission(challenge_id=over.id, name="Winner", mobile="01711111111", description="d", is_winner=True),
            ChallengeSubmission(challenge_id=over.id, name="Runner", mobile="01722222222", description="d"),
        ]
    )
    await session.commit()
    data = (await client.get(f"/api/v1/challenges/{over.id}")).json()["data"]
    assert data["computed_status"] == "ended"
    assert [w["name"] for w in data["winners"]] == ["Winner"]
    assert "mobile" not in data["winners"][0]


@pytest.mark.asyncio
async def test_archived_detail_is_hidden(client: AsyncClient, challenges):
    assert (await client.get(f"/api/v1/challenges/{challenges['archived'].id}")).status_code == 404


@pytest.mark.asyncio
async def test_submit_to_running_challenge(client: AsyncClient, challenges):
    response = await client.post(
        "/api/v1/challenges/submit",
        json={
            "challenge_id": challenges["running"].id,
            "name": "  ",
            "mobile": " 01712345678 ",
            "description": "  Planted ten trees  ",
            "files": ["https://cdn.test/challenges/images/2025/01/a.jpg"],
        },
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] is None
    assert data["mobile"] == "01712345678"
    assert data["description"] == "Planted ten trees"


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["soon", "over", "draft"])
async def test_submit_outside_window(client: AsyncClient, challenges, key):
    payload = {"challenge_id": challenges[key].id, "mobile": "01712345678", "description": "entry"}
    response = await client.post("/api/v1/challenges/submit", json=payload)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_validation(client: AsyncClient, challenges):
    base = {"challenge_id": challenges["running"].id, "mobile": "01712345678"}
    assert (await client.post("/api/v1/challenges/submit", json={**base, "description": "x" * 501})).status_code == 400
    too_many = {**base, "description": "ok", "files": [f"f{i}" for i in range(6)]}
    assert (await client.post("/api/v1/challenges/submit", json=too_many)).status_code == 400
    unknown = {**base, "challenge_id": 9999, "description": "ok"}
    assert (await client.post("/api/v1/challenges/submit", json=unknown)).status_code == 404

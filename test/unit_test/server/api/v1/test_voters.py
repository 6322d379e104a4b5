from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient

from campaign_portal.core.database.entities import Voter, VoterMetadata

pytestmark = pytest.mark.asyncio

BIRTHDAY = date(1980, 5, 17)


@pytest_asyncio.fixture
async def roll(session):
    north = VoterMetadata(voter_area_name="Uttar Para", voter_area_no="0102", ward_no="01")
    south = VoterMetadata(voter_area_name="Dakkhin Para", voter_area_no="0101", ward_no="01")
    session.add_all([north, south])
    await session.flush()
    session.add_all(
        [
            Voter(voter_metadata_id=north.id, serial_no=2, voter_no="V-2", voter_name="Karim Uddin", date_of_birth=BIRTHDAY),
            Voter(voter_metadata_id=north.id, serial_no=1, voter_no="V-1", voter_name="Salma Begum", date_of_birth=BIRTHDAY),
            Voter(voter_metadata_id=north.id, serial_no=3, voter_no="V-3", voter_name="Other", date_of_birth=date(1990, 1, 1)),
            Voter(voter_metadata_id=south.id, serial_no=1, voter_no="V-4", voter_name="Karim Ali", date_of_birth=BIRTHDAY),
        ]
    )
    await session.commit()
    return {"north": north, "south": south}


async def test_wards_by_area_number(client: AsyncClient, roll):
    data = (await client.get("/api/v1/voters/wards")).json()["data"]
    assert [w["voter_area_no"] for w in data] == ["0101", "0102"]


async def test_search_by_ward_and_birthday(client: AsyncClient, roll):
    response = await client.get(
        "/api/v1/voters/search", params={"ward_id": roll["north"].id, "date_of_birth": BIRTHDAY.isoformat()}
    )
    data = response.json()["data"]
    assert data["total"] == 2
    assert [v["voter_no"] for v in data["voters"]] == ["V-1", "V-2"]
    assert data["voters"][0]["voter_metadata"]["voter_area_name"] == "Uttar Para"


async def test_search_narrowed_by_name_and_area(client: AsyncClient, roll):
    params = {"ward_id": roll["north"].id, "date_of_birth": BIRTHDAY.isoformat(), "voter_name": " karim "}
    data = (await client.get("/api/v1/voters/search", params=params)).json()["data"]
    assert [v["voter_name"] for v in data["voters"]] == ["Karim Uddin"]

    params["area_id"] = "0101"
    assert (await client.get("/api/v1/voters/search", params=params)).json()["data"]["total"] == 0


async def test_search_requires_ward_and_birthday(client: AsyncClient):
    assert (await client.get("/api/v1/voters/search", params={"ward_id": 1})).status_code == 400
    response = await client.get("/api/v1/voters/search", params={"ward_id": 1, "date_of_birth": "17-05-1980"})
    assert response.status_code == 400

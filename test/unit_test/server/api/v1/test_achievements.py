from datetime import date

import pytest
from httpx import AsyncClient

from campaign_portal.core.database.entities import Achievement, AchievementCategory
from campaign_portal.core.utils import utc_now
from campaign_portal.server.core.config import settings

pytestmark = pytest.mark.asyncio


async def _seed(session):
    health = AchievementCategory(name_en="Health", name_bn="স্বাস্থ্য", slug="health")
    session.add(health)
    await session.commit()
    session.add_all(
        [
            Achievement(
                title_en="Clinic",
                title_bn="ক্লিনিক",
                category_id=health.id,
                achievement_date=date(2023, 4, 1),
                impact_metrics={"people_helped": "1,200", "investment": 500000},
                is_featured=True,
            ),
            Achievement(
                title_en="Road",
                title_bn="সড়ক",
                achievement_date=date(2024, 2, 1),
                impact_metrics={"people_helped": 300, "investment": "not disclosed"},
            ),
            Achievement(title_en="Old", title_bn="পুরনো", is_active=False, impact_metrics={"people_helped": 999}),
        ]
    )
    await session.commit()


async def test_list_latest_first(client: AsyncClient, session):
    await _seed(session)
    body = (await client.get("/api/v1/achievements")).json()
    assert [a["title_en"] for a in body["data"]] == ["Road", "Clinic"]
    assert body["data"][1]["category"]["slug"] == "health"


@pytest.mark.parametrize(
    "params,expected",
    [({"year": 2023}, ["Clinic"]), ({"category": "health"}, ["Clinic"]), ({"featured": "false"}, ["Road"])],
)
async def test_filters(client: AsyncClient, session, params, expected):
    await _seed(session)
    body = (await client.get("/api/v1/achievements", params=params)).json()
    assert [a["title_en"] for a in body["data"]] == expected


async def test_stats_parse_formatted_numbers(client: AsyncClient, session):
    await _seed(session)
    stats = (await client.get("/api/v1/achievements/stats")).json()["data"]
    assert stats["total_projects"] == 2
    assert stats["total_people_helped"] == 1500
    assert stats["total_investment"] == 500000.0
    assert stats["years_of_service"] == utc_now().year - settings.service_start_year


async def test_categories(client: AsyncClient, session):
    await _seed(session)
    body = (await client.get("/api/v1/achievements/categories")).json()
    assert [c["slug"] for c in body["data"]] == ["health"]

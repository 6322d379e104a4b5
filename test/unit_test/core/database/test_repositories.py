"""Tests for the shared async repository and query helpers."""

from __future__ import annotations

import pytest
from sqlmodel import select

from campaign_portal.core.database.entities import Category, Complaint, ContactMessage
from campaign_portal.core.database.repositories import AsyncRepository, QueryBuilder, count_rows, fetch_page
from campaign_portal.core.models.domain.enums import ContactStatus, ContentType
from campaign_portal.core.utils import utc_now


def _category(slug: str, content_type: ContentType = ContentType.news, order: int = 0) -> Category:
    return Category(
        name_en=slug.title(),
        name_bn=slug,
        slug=slug,
        content_type=content_type,
        display_order=order,
    )


@pytest.fixture
def repository(in_memory_session):
    return AsyncRepository(in_memory_session, Category)


class TestQueryBuilder:
    def test_none_values_and_unknown_columns_are_ignored(self):
        stmt = QueryBuilder.apply_filters(
            select(Category), Category, {"slug": None, "no_such_column": "x", "is_active": True}
        )
        compiled = str(stmt)
        assert "categories.is_active" in compiled
        assert "categories.slug =" not in compiled

    def test_pagination_is_optional(self):
        stmt = select(Category)
        assert QueryBuilder.apply_pagination(stmt, None, None) is stmt


@pytest.mark.asyncio
class TestAsyncRepository:
    async def test_create_and_get(self, repository):
        created = await repository.create(_category("health"))

        assert created.id is not None
        assert (await repository.get_by_id(created.id)).slug == "health"
        assert (await repository.get_by(slug="health")).id == created.id
        assert await repository.get_by(slug="missing") is None

    async def test_exists_can_exclude_one_row(self, repository):
        created = await repository.create(_category("roads"))

        assert await repository.exists(slug="roads")
        assert not await repository.exists(exclude_id=created.id, slug="roads")

    async def test_list_filters_orders_and_counts_before_paging(self, repository):
        await repository.create(_category("b-news", order=2))
        await repository.create(_category("a-news", order=1))
        await repository.create(_category("c-news", order=3))
        await repository.create(_category("photos-only", ContentType.photos))

        rows, total = await repository.list(
            limit=2,
            offset=0,
            filters={"content_type": ContentType.news, "is_active": None},
            order_by=[Category.display_order],
        )

        assert total == 3
        assert [row.slug for row in rows] == ["a-news", "b-news"]

        rows, total = await repository.list(limit=2, offset=2, filters={"content_type": ContentType.news})
        assert total == 3
        assert len(rows) == 1

    async def test_update_applies_partial_data_and_touches_updated_at(self, repository):
        created = await repository.create(_category("water"))
        before = created.updated_at

        updated = await repository.update(created, {"name_en": "Clean Water"})

        assert updated.name_en == "Clean Water"
        assert updated.slug == "water"
        assert updated.updated_at >= before

    async def test_delete(self, repository):
        created = await repository.create(_category("temporary"))

        await repository.delete(created)

        assert await repository.get_by_id(created.id) is None


@pytest.mark.asyncio
class TestPagingHelpers:
    async def test_count_rows_ignores_ordering(self, in_memory_session):
        repo = AsyncRepository(in_memory_session, ContactMessage)
        for index in range(3):
            await repo.create(
                ContactMessage(name=f"Sender {index}", email=f"s{index}@example.com", subject="Hi", message="Hello")
            )

        stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc())
        assert await count_rows(in_memory_session, stmt) == 3

    async def test_fetch_page_returns_rows_and_total(self, in_memory_session):
        repo = AsyncRepository(in_memory_session, ContactMessage)
        for index in range(5):
            await repo.create(
                ContactMessage(
                    name=f"Sender {index}",
                    email=f"s{index}@example.com",
                    subject="Hi",
                    message="Hello",
                    status=ContactStatus.read if index % 2 else ContactStatus.pending,
                )
            )

        stmt = select(ContactMessage).where(ContactMessage.status == ContactStatus.pending).order_by(ContactMessage.id)
        rows, total = await fetch_page(in_memory_session, stmt, limit=2, offset=0)

        assert total == 3
        assert [row.name for row in rows] == ["Sender 0", "Sender 2"]


@pytest.mark.asyncio
class TestNaiveTimestamps:
    async def test_audit_columns_round_trip_as_naive_utc(self, in_memory_session):
        repo = AsyncRepository(in_memory_session, ContactMessage)
        created = await repo.create(ContactMessage(name="A", email="a@example.com", subject="s", message="m"))
        in_memory_session.expunge_all()

        result = await in_memory_session.execute(select(ContactMessage).where(ContactMessage.id == created.id))
        loaded = result.scalar_one()

        assert loaded.created_at.tzinfo is None
        assert loaded.updated_at.tzinfo is None
        assert abs((loaded.created_at - utc_now()).total_seconds()) < 60

    async def test_optional_timestamp_columns_accept_naive_values(self, in_memory_session):
        stamped = utc_now().replace(microsecond=0)
        repo = AsyncRepository(in_memory_session, Complaint)
        created = await repo.create(
            Complaint(
                tracking_id="CMP-20260101-ABC123",
                ward="01",
                category="roads",
                subject="Pothole",
                message="Deep pothole near the market",
            )
        )

        updated = await repo.update(created, {"responded_at": stamped})
        in_memory_session.expunge_all()
        loaded = await in_memory_session.get(Complaint, updated.id)

        assert loaded.responded_at == stamped
        assert loaded.responded_at.tzinfo is None

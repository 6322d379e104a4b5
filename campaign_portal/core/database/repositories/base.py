"""
Base repository and query utilities.

:class:`AsyncRepository` wraps the CRUD operations every content table needs
(get, list with filters and pagination, create, partial update, delete) so
routers only add what is specific to their resource.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from campaign_portal.core.utils import utc_now

EntityType = TypeVar("EntityType", bound=SQLModel)


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters, skipping ``None`` values and unknown columns.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


async def count_rows(session: AsyncSession, stmt) -> int:
    """Count the rows a select statement would return (ignoring order/limit)."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    result = await session.execute(count_stmt)
    return int(result.scalar_one())


async def fetch_page(
    session: AsyncSession, stmt, limit: Optional[int], offset: Optional[int]
) -> Tuple[List[Any], int]:
    """Run ``stmt`` for one page and return ``(rows, total)``."""
    total = await count_rows(session, stmt)
    result = await session.execute(QueryBuilder.apply_pagination(stmt, limit, offset))
    return list(result.scalars().all()), total


class AsyncRepository(Generic[EntityType]):
    """Async CRUD repository for a single SQLModel table."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def get_by(self, **filters: Any) -> Optional[EntityType]:
        stmt = QueryBuilder.apply_filters(select(self.model), self.model, filters)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def exists(self, exclude_id: Optional[int] = None, **filters: Any) -> bool:
        """True when a row matches ``filters`` (optionally ignoring one id)."""
        stmt = QueryBuilder.apply_filters(select(self.model), self.model, filters)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first() is not None

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[Any] = (),
    ) -> Tuple[List[EntityType], int]:
        """List entities with equality filters, ordering and pagination.

        Returns:
            Tuple of (page of entities, total matching rows)
        """
        stmt = QueryBuilder.apply_filters(select(self.model), self.model, filters or {})
        if order_by:
            stmt = stmt.order_by(*order_by)
        return await fetch_page(self.session, stmt, limit, offset)

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: EntityType, data: Dict[str, Any]) -> EntityType:
        """Apply a partial update (already filtered with ``exclude_unset``)."""
        for key, value in data.items():
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: EntityType) -> None:
        await self.session.delete(entity)
        await self.session.commit()

"""
Database layer for the campaign portal.

Structure:
- entities/: SQLModel table entities, one module per content area
- repositories/: shared query helpers
- session.py: global engine and session factory
- utils.py: engine/session factory helpers
"""

from .base import Base, TimestampedBase
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "TimestampedBase",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]

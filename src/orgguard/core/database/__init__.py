"""Database layer - session management, base models, and mixins."""

from orgguard.core.database.base import Base, IdMixin, TimestampMixin
from orgguard.core.database.session import (
    async_engine,
    async_session_factory,
    configure_sqlite,
    get_db,
)


__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "async_engine",
    "async_session_factory",
    "configure_sqlite",
    "get_db",
]

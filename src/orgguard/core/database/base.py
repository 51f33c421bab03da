"""SQLAlchemy declarative base and common mixins."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from orgguard.core.constants import MAX_ID_LENGTH


def generate_id() -> str:
    """Generate an opaque string identifier."""
    return str(uuid4())


def utcnow() -> datetime:
    """Current time in UTC with microsecond precision."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class IdMixin:
    """Mixin that adds an opaque string primary key."""

    id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH),
        primary_key=True,
        default=generate_id,
    )


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps.

    Timestamps are stamped client-side so rows inserted within the same
    second still sort in insertion order; the server default covers rows
    written outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

"""Mixins and column types for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always loads as UTC.

    PostgreSQL keeps the offset, but SQLite hands back naive values, so a
    naive value read from the database is taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns.

    Both are set from Python rather than the server clock so that an update
    which changes no other column still moves updated_at forward.
    """

    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False, index=True)

    def touch(self, now: datetime | None = None) -> None:
        """Refresh updated_at."""
        self.updated_at = now or utcnow()

# src/threadline/db/time.py
"""Timestamp helpers for ``created_at`` columns."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware creation timestamp used as a column default."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values read back from backends without time zones (SQLite)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value

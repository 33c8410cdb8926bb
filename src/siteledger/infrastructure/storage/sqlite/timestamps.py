"""Timestamp encoding for SQLite TEXT columns."""

from datetime import UTC, date, datetime


def to_storage_time(value: datetime) -> str:
    """Normalize to UTC with a fixed-width ISO string so text ordering is time ordering."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_storage_time(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def from_storage_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None

"""Datetime conversion utilities."""

from datetime import UTC, datetime


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return an aware UTC datetime, assuming UTC for naive values."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def datetime_to_iso(value: datetime | None) -> str | None:
    """Convert a datetime to an ISO-8601 string, or None."""
    if value is None:
        return None
    return ensure_utc(value).isoformat()


def datetime_from_iso(value: str | None) -> datetime | None:
    """Convert an ISO-8601 string to a UTC datetime, or None.

    Unparseable strings also yield None.
    """
    if not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except ValueError:
        return None

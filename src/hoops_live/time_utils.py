"""Shared timestamp helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime


def iso_z(value: datetime) -> str:
    """Format a datetime as ISO-8601 with trailing Z in UTC."""
    normalized = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return normalized.isoformat().replace("+00:00", "Z")


def parse_iso_z(value: str) -> datetime | None:
    """Parse an ISO timestamp and normalize to UTC."""
    raw = value.strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def calendar_day(value: date | datetime) -> date:
    """Return the local calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def query_date(value: date | datetime) -> str:
    """Format the upstream `date` query parameter (YYYY-MM-DD)."""
    return calendar_day(value).isoformat()


def parse_query_date(value: str) -> date:
    """Parse a YYYY-MM-DD string; raises ValueError on bad input."""
    return date.fromisoformat(value.strip())

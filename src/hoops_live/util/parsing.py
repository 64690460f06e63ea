"""Shared parsing helpers for tolerant numeric/string coercion."""

from __future__ import annotations

from typing import Any


def safe_int(value: Any) -> int | None:
    """Parse number-like input into int, returning None when invalid."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.startswith("+"):
            raw = raw[1:]
        try:
            return int(raw)
        except ValueError:
            return None
    return None


def points(value: Any) -> int:
    """Parse a points value; missing or invalid input counts as zero."""
    parsed = safe_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def id_str(value: Any) -> str:
    """Render an upstream id (int or str) as a stripped string."""
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def optional_str(value: Any) -> str | None:
    """Return a stripped string, or None for absent/blank input."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}

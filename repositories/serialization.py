"""
Row serialization helpers shared by the Supabase repositories.

Supabase returns timestamps as ISO-8601 strings (sometimes with a trailing 'Z')
and expects the same on writes. Enum members are stored by value.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


def to_iso_utc(dt: datetime) -> str:
    """
    Convert a timezone-aware datetime to an ISO-8601 string in UTC.

    Domain objects require UTC timestamps; we still normalize via
    `astimezone(timezone.utc)`.
    """

    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("timestamp must be timezone-aware (UTC)")
    return dt.astimezone(timezone.utc).isoformat()


def to_optional_iso_utc(dt: Optional[datetime]) -> Optional[str]:
    return to_iso_utc(dt) if dt is not None else None


def parse_utc_datetime(value: Any) -> datetime:
    """Parse a Supabase timestamp into a timezone-aware UTC datetime."""

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        # Python's fromisoformat doesn't consistently accept 'Z' across versions.
        text = value.replace("Z", "+00:00")
        dt = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    # Naive timestamps from the backend are interpreted as UTC.
    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_optional_utc_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return parse_utc_datetime(value)


def to_db_value(value: Any) -> Any:
    """Convert a domain value into a JSON-compatible column value."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return to_iso_utc(value)
    return value


def raise_on_error(response: Any, action: str) -> None:
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to {action}: {error}")


def response_rows(response: Any) -> list:
    return getattr(response, "data", None) or []

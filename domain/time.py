"""
Domain time utilities (pure).

Centralized timestamp validation and elapsed-time helpers used by scoring and
cadence rules. No implicit "now" is read here; callers pass instants explicitly.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforce that a timestamp is UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def require_optional_utc_timestamp(name: str, value: Optional[datetime]) -> None:
    if value is not None:
        require_utc_timestamp(name, value)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def elapsed_since(earlier: Optional[datetime], as_of: datetime) -> Optional[timedelta]:
    """
    Time elapsed between `earlier` and `as_of`.

    Returns None when `earlier` is absent (never happened).
    """

    if earlier is None:
        return None
    return as_of - earlier


def days_between(earlier: datetime, as_of: datetime) -> float:
    """Fractional days from `earlier` to `as_of` (negative if `earlier` is in the future)."""

    return (as_of - earlier) / timedelta(days=1)

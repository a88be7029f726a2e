"""Timestamp helpers shared by the store translation and request validation."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def as_utc(dt: datetime) -> datetime:
    # Timestamps read back without a zone (SQLite) are stored as UTC.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp or bare date into an aware UTC datetime.

    Raises ValueError when the text is not ISO-8601.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return datetime.combine(date.fromisoformat(text), time(), tzinfo=timezone.utc)


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort calendar date from a date, datetime or ISO string; None otherwise."""
    if isinstance(value, datetime):
        return as_utc(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_datetime(value).date()
        except ValueError:
            return None
    return None

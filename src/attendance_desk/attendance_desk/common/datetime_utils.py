from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_utc() -> date:
    """Current calendar day in UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).date()


def _to_wire(instant: datetime) -> str:
    return instant.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_midnight_iso(day: date) -> str:
    """Calendar day as the backend expects it: midnight UTC, e.g. 2025-03-01T00:00:00.000Z."""
    return _to_wire(datetime.combine(day, time(0, 0), tzinfo=timezone.utc))


def combine_utc_iso(day: date, minutes_of_day: int) -> str:
    """Combine a calendar day with a wall-clock minute offset, always in UTC."""
    start = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return _to_wire(start + timedelta(minutes=int(minutes_of_day)))


def parse_iso_instant(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Naive values are read as UTC. Returns None for empty or malformed input.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def iso_to_hhmm(value: object) -> str:
    """UTC wall-clock HH:MM of an ISO instant, or "" when it cannot be read."""
    instant = parse_iso_instant(value)
    if instant is None:
        return ""
    return f"{instant.hour:02d}:{instant.minute:02d}"

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_date_taken(dt: datetime) -> str:
    """Render a check time as e.g. ``Mon Jan  5 14:03:22 2024`` (UTC, day padded to 2)."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return f"{dt:%a %b} {dt.day:>2} {dt:%H:%M:%S} {dt.year}"

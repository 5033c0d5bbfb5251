from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """Parse an ``HH:MM`` wall-clock string.

    Returns None for blank input, non-numeric parts or out-of-range values.
    Seconds (``HH:MM:SS``) are accepted and ignored, matching MySQL TIME output.
    """

    if not value or not str(value).strip():
        return None

    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return time(hour=hours, minute=minutes)


def parse_time_of_day_lenient(value: Optional[str]) -> Optional[time]:
    """Like :func:`parse_time_of_day` but malformed parts degrade to 0.

    Only blank input means "not configured".
    """

    if not value or not str(value).strip():
        return None

    parts = str(value).strip().split(":")
    hours = _int_or_zero(parts[0])
    minutes = _int_or_zero(parts[1]) if len(parts) > 1 else 0

    if not 0 <= hours <= 23:
        hours = 0
    if not 0 <= minutes <= 59:
        minutes = 0
    return time(hour=hours, minute=minutes)


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def whole_seconds_until(target: datetime, now: datetime) -> int:
    """Seconds from ``now`` to ``target``, floored and never negative."""
    seconds = int((target - now).total_seconds() // 1)
    return max(0, seconds)


def format_hms(total_seconds: int) -> str:
    """Format seconds as zero-padded HH:MM:SS (hours are not wrapped at 24)."""
    total_seconds = max(0, int(total_seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_clock(value: datetime | time) -> str:
    """12-hour clock label, e.g. ``1:05 PM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_time_12h(value: Optional[str]) -> str:
    """Convert an ``HH:MM`` string to a 12-hour label; blank/invalid gives ''."""
    parsed = parse_time_of_day(value)
    if parsed is None:
        return ""
    return format_clock(parsed)


def to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int | float) -> datetime:
    return datetime.fromtimestamp(float(value) / 1000)

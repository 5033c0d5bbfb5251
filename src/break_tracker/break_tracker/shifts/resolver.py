from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import minutes_of_day, parse_time_of_day
from ..core.constants import DEFAULT_SHIFT_HOURS, MINUTES_PER_DAY
from .model import ShiftConfig, ShiftOccurrence


def shift_duration(config: ShiftConfig) -> Optional[timedelta]:
    """Duration of one occurrence, or None when the start time is unusable.

    An end time at or before the start wraps into the next day, so equal
    start/end means a full 24 hours rather than an empty shift.
    """

    start = parse_time_of_day(config.start_time_of_day)
    if start is None:
        return None

    end = parse_time_of_day(config.end_time_of_day)
    if end is None:
        return timedelta(hours=DEFAULT_SHIFT_HOURS)

    start_minutes = minutes_of_day(start)
    end_minutes = minutes_of_day(end)
    if end_minutes <= start_minutes:
        end_minutes += MINUTES_PER_DAY
    return timedelta(minutes=end_minutes - start_minutes)


def _occurrence_on(day: date, start: time, duration: timedelta) -> ShiftOccurrence:
    start_at = datetime.combine(day, start)
    return ShiftOccurrence(start=start_at, end=start_at + duration)


def resolve_shift_window(config: ShiftConfig, now: datetime) -> Optional[ShiftOccurrence]:
    """Pick the shift occurrence that contains ``now`` or follows it next.

    Yesterday's occurrence is checked first so an overnight shift stays active
    after midnight, then today's, then tomorrow's.
    """

    start = parse_time_of_day(config.start_time_of_day)
    duration = shift_duration(config)
    if start is None or duration is None:
        return None

    today = now.date()
    yesterday = _occurrence_on(today - timedelta(days=1), start, duration)
    current = _occurrence_on(today, start, duration)
    tomorrow = _occurrence_on(today + timedelta(days=1), start, duration)

    for candidate in (yesterday, current, tomorrow):
        if candidate.contains(now):
            return candidate

    if now < current.start:
        return current
    return tomorrow

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from ..common.datetime_utils import parse_time_of_day_lenient
from ..shifts.model import ShiftOccurrence
from .model import BreakConfig, BreakOccurrence


def project_breaks(breaks: Iterable[BreakConfig], occurrence: ShiftOccurrence) -> List[BreakOccurrence]:
    """Place each configured break inside ``occurrence``.

    A break whose clock time falls before the shift start belongs to the next
    calendar day (overnight shifts). Breaks outside ``[start, end]`` are
    dropped. The result is sorted by start; ties keep slot order.
    """

    projected: list[BreakOccurrence] = []
    for cfg in breaks:
        clock = parse_time_of_day_lenient(cfg.time_of_day)
        if clock is None:
            continue

        start = datetime.combine(occurrence.start.date(), clock)
        if start < occurrence.start:
            start += timedelta(days=1)

        if occurrence.contains(start):
            projected.append(BreakOccurrence(key=cfg.key, start=start, duration_seconds=int(cfg.duration_seconds)))

    projected.sort(key=lambda b: b.start)
    return projected


def next_break_after(
    breaks: Iterable[BreakConfig],
    occurrence: ShiftOccurrence,
    now: datetime,
) -> Optional[BreakOccurrence]:
    """First in-shift break starting strictly after ``now``."""
    for item in project_breaks(breaks, occurrence):
        if item.start > now:
            return item
    return None


def next_raw_break(breaks: Iterable[BreakConfig], now: datetime) -> Optional[BreakOccurrence]:
    """Next break by clock time alone, used when no shift is configured.

    Each break is placed today, or tomorrow if that moment is not after ``now``.
    """

    candidates: list[BreakOccurrence] = []
    for cfg in breaks:
        clock = parse_time_of_day_lenient(cfg.time_of_day)
        if clock is None:
            continue

        start = datetime.combine(now.date(), clock)
        if start <= now:
            start += timedelta(days=1)
        candidates.append(BreakOccurrence(key=cfg.key, start=start, duration_seconds=int(cfg.duration_seconds)))

    if not candidates:
        return None
    candidates.sort(key=lambda b: b.start)
    return candidates[0]


def raw_breaks_for_day(breaks: Iterable[BreakConfig], now: datetime) -> List[BreakOccurrence]:
    """Breaks placed on ``now``'s calendar date, sorted by start."""
    out: list[BreakOccurrence] = []
    for cfg in breaks:
        clock = parse_time_of_day_lenient(cfg.time_of_day)
        if clock is None:
            continue
        out.append(
            BreakOccurrence(
                key=cfg.key,
                start=datetime.combine(now.date(), clock),
                duration_seconds=int(cfg.duration_seconds),
            )
        )
    out.sort(key=lambda b: b.start)
    return out

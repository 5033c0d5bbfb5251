from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..breaks.model import ActiveBreakState, BreakConfig
from ..breaks.projector import next_break_after, next_raw_break
from ..common.datetime_utils import format_clock, whole_seconds_until
from ..core.constants import BREAK_LABELS, DEFAULT_BREAK_DURATIONS
from ..core.enums import BreakKey, CountdownKind, PostShiftPolicy
from ..shifts.model import ShiftConfig, ShiftOccurrence
from ..shifts.resolver import resolve_shift_window
from .model import CountdownState


def break_duration(breaks: Sequence[BreakConfig], key: BreakKey) -> int:
    for cfg in breaks:
        if cfg.key == key:
            return int(cfg.duration_seconds)
    return DEFAULT_BREAK_DURATIONS[key.value]


def _next_shift_start(
    config: ShiftConfig,
    occurrence: ShiftOccurrence,
    policy: PostShiftPolicy,
) -> datetime:
    if policy == PostShiftPolicy.EXTRAPOLATE:
        return occurrence.start + timedelta(hours=24)

    following = resolve_shift_window(config, occurrence.end + timedelta(seconds=1))
    if following is None or following.start <= occurrence.end:
        return occurrence.start + timedelta(hours=24)
    return following.start


def compute_countdown(
    now: datetime,
    shift: ShiftConfig,
    breaks: Sequence[BreakConfig],
    active_break: Optional[ActiveBreakState] = None,
    *,
    occurrence: Optional[ShiftOccurrence] = None,
    post_shift_policy: PostShiftPolicy = PostShiftPolicy.RESOLVE,
) -> CountdownState:
    """Derive the countdown label for ``now``.

    Rules, first match wins: a running break, no shift (raw break times),
    before shift, after shift, next in-shift break, shift end.

    ``occurrence`` may be passed when the caller already resolved the shift
    window for this tick; otherwise it is resolved here.
    """

    expired: Optional[BreakKey] = None
    if active_break is not None:
        duration = break_duration(breaks, active_break.key)
        elapsed = (now - active_break.started_at).total_seconds()
        if elapsed < duration:
            end = active_break.started_at + timedelta(seconds=duration)
            return CountdownState(
                kind=CountdownKind.BREAK_LEFT,
                remaining_seconds=whole_seconds_until(end, now),
                target=end,
                break_key=active_break.key,
                caption=BREAK_LABELS[active_break.key.value],
            )
        expired = active_break.key

    if occurrence is None:
        occurrence = resolve_shift_window(shift, now)

    if occurrence is None:
        upcoming = next_raw_break(breaks, now)
        if upcoming is None:
            return CountdownState(kind=CountdownKind.IDLE, expired_break=expired)
        return CountdownState(
            kind=CountdownKind.NEXT_BREAK,
            remaining_seconds=whole_seconds_until(upcoming.start, now),
            target=upcoming.start,
            break_key=upcoming.key,
            expired_break=expired,
            caption=f"Next: {upcoming.label} at {format_clock(upcoming.start)}",
        )

    if now < occurrence.start:
        return _next_shift(now, occurrence.start, expired)

    if now > occurrence.end:
        return _next_shift(now, _next_shift_start(shift, occurrence, post_shift_policy), expired)

    upcoming = next_break_after(breaks, occurrence, now)
    if upcoming is not None:
        return CountdownState(
            kind=CountdownKind.NEXT_BREAK,
            remaining_seconds=whole_seconds_until(upcoming.start, now),
            target=upcoming.start,
            break_key=upcoming.key,
            expired_break=expired,
            caption=f"Next: {upcoming.label} at {format_clock(upcoming.start)}",
        )

    return CountdownState(
        kind=CountdownKind.SHIFT_ENDS,
        remaining_seconds=whole_seconds_until(occurrence.end, now),
        target=occurrence.end,
        expired_break=expired,
        caption=f"Shift ends at {format_clock(occurrence.end)}",
    )


def _next_shift(now: datetime, start: datetime, expired: Optional[BreakKey]) -> CountdownState:
    return CountdownState(
        kind=CountdownKind.NEXT_SHIFT,
        remaining_seconds=whole_seconds_until(start, now),
        target=start,
        expired_break=expired,
        caption=f"Next shift at {format_clock(start)}",
    )

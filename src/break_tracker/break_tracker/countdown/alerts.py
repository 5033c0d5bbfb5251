from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Set, Tuple

from ..breaks.model import BreakOccurrence
from ..common.datetime_utils import format_clock
from ..core.constants import (
    BREAK_LABELS,
    BREAK_ENDING_MINUTES,
    BREAK_REMINDER_MINUTES,
    NEXT_BREAK_ALERT_MINUTES,
    SHIFT_END_ALERT_MINUTES,
    SHIFT_REMINDER_MINUTES,
)
from ..core.enums import CountdownKind
from ..shifts.model import ShiftOccurrence
from .model import CountdownState


@dataclass(frozen=True)
class ThresholdAlert:
    kind: CountdownKind
    minutes: int
    target: Optional[datetime]
    title: str
    body: str


@dataclass(frozen=True)
class Reminder:
    """A one-shot notification due at ``due_at``."""

    due_at: datetime
    title: str
    body: str


def _thresholds_for(kind: CountdownKind) -> Tuple[int, ...]:
    if kind == CountdownKind.NEXT_BREAK:
        return NEXT_BREAK_ALERT_MINUTES
    if kind == CountdownKind.SHIFT_ENDS:
        return SHIFT_END_ALERT_MINUTES
    return ()


def title_alert(state: CountdownState) -> Optional[str]:
    """Browser-title style text while a threshold minute is showing."""
    minutes = state.remaining_minutes
    if minutes not in _thresholds_for(state.kind):
        return None

    if state.kind == CountdownKind.NEXT_BREAK:
        prefix = "⏳ " if minutes <= 5 else ""
        return f"{prefix}Next break in {minutes}m"
    return f"⏳ Shift ends in {minutes}m"


class AlertTracker:
    """Fires each threshold once per countdown target.

    The countdown sits on the same whole minute for sixty ticks; only the
    first of them produces an alert.
    """

    def __init__(self):
        self._fired: Set[Tuple[CountdownKind, Optional[datetime], int]] = set()

    def __len__(self) -> int:
        return len(self._fired)

    def poll(self, state: CountdownState) -> List[ThresholdAlert]:
        if state.target is not None:
            self._fired = {m for m in self._fired if m[1] is None or m[1] >= state.target}

        minutes = state.remaining_minutes
        if minutes not in _thresholds_for(state.kind):
            return []

        marker = (state.kind, state.target, minutes)
        if marker in self._fired:
            return []
        self._fired.add(marker)

        if state.kind == CountdownKind.NEXT_BREAK:
            title = "Break Reminder"
            label = BREAK_LABELS[state.break_key.value] if state.break_key else "Next break"
            body = f"{label} starts in {minutes} minutes"
        else:
            title = "Shift Ending Soon"
            body = f"Shift ends in {minutes} minutes"
        return [ThresholdAlert(kind=state.kind, minutes=minutes, target=state.target, title=title, body=body)]

    def reset(self) -> None:
        self._fired.clear()


def plan_reminders(
    now: datetime,
    occurrence: Optional[ShiftOccurrence],
    breaks: Iterable[BreakOccurrence],
) -> List[Reminder]:
    """One-shot reminders still ahead of ``now``, sorted by due time."""
    planned: list[Reminder] = []

    for item in breaks:
        planned.append(
            Reminder(
                due_at=item.start - timedelta(minutes=BREAK_REMINDER_MINUTES),
                title="Break Reminder",
                body=f"{item.label} starts in {BREAK_REMINDER_MINUTES} minutes at {format_clock(item.start)}",
            )
        )
        planned.append(
            Reminder(
                due_at=item.end - timedelta(minutes=BREAK_ENDING_MINUTES),
                title="Break Ending Soon",
                body=f"{BREAK_ENDING_MINUTES} minute left in {item.label} (ends at {format_clock(item.end)})",
            )
        )

    if occurrence is not None:
        planned.append(
            Reminder(
                due_at=occurrence.start - timedelta(minutes=SHIFT_REMINDER_MINUTES),
                title="Shift Reminder",
                body=f"Shift starts in {SHIFT_REMINDER_MINUTES} minutes",
            )
        )
        planned.append(
            Reminder(
                due_at=occurrence.end - timedelta(minutes=SHIFT_REMINDER_MINUTES),
                title="Shift Ending Soon",
                body=f"Shift ends in {SHIFT_REMINDER_MINUTES} minutes",
            )
        )

    upcoming = [r for r in planned if r.due_at > now]
    upcoming.sort(key=lambda r: r.due_at)
    return upcoming

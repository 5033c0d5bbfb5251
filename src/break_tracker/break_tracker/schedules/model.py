from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..breaks.model import BreakConfig
from ..core.constants import DEFAULT_BREAK_DURATIONS, DEFAULT_BREAK_TIMES
from ..core.enums import BreakKey
from ..shifts.model import ShiftConfig


@dataclass(frozen=True)
class UserSettings:
    """Global schedule settings of one user."""

    user_id: int
    shift_start_time: Optional[str] = None
    shift_end_time: Optional[str] = None
    break1_time: Optional[str] = DEFAULT_BREAK_TIMES["break1"]
    break2_time: Optional[str] = DEFAULT_BREAK_TIMES["break2"]
    break3_time: Optional[str] = DEFAULT_BREAK_TIMES["break3"]
    break1_duration: int = DEFAULT_BREAK_DURATIONS["break1"]
    break2_duration: int = DEFAULT_BREAK_DURATIONS["break2"]
    break3_duration: int = DEFAULT_BREAK_DURATIONS["break3"]


@dataclass(frozen=True)
class DailyShift:
    """Per-date override of the global settings.

    Empty fields fall back to the user's settings. Durations are seconds.
    """

    user_id: int
    shift_date: date
    is_off_day: bool = False
    shift_start: Optional[str] = None
    shift_end: Optional[str] = None
    break1_time: Optional[str] = None
    break2_time: Optional[str] = None
    break3_time: Optional[str] = None
    break1_duration: Optional[int] = None
    break2_duration: Optional[int] = None
    break3_duration: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class EffectiveSchedule:
    """What the countdown uses for one day."""

    shift: ShiftConfig
    breaks: List[BreakConfig] = field(default_factory=list)
    is_off_day: bool = False
    notes: Optional[str] = None

    def durations(self) -> dict[BreakKey, int]:
        return {b.key: int(b.duration_seconds) for b in self.breaks}

    def to_dict(self) -> dict:
        return {
            "shift_start": self.shift.start_time_of_day,
            "shift_end": self.shift.end_time_of_day,
            "breaks": [
                {"key": b.key.value, "time": b.time_of_day, "duration_seconds": b.duration_seconds}
                for b in self.breaks
            ],
            "is_off_day": self.is_off_day,
            "notes": self.notes,
        }

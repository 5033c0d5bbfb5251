from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class ShiftConfig:
    """Recurring daily work shift as stored in user settings.

    Times are ``HH:MM`` strings. No start time means no shift window exists;
    no end time means the default nine hour shift.
    """

    start_time_of_day: Optional[str] = None
    end_time_of_day: Optional[str] = None


@dataclass(frozen=True)
class ShiftOccurrence:
    """One dated instance of a ShiftConfig."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import from_epoch_ms, to_epoch_ms
from ..core.constants import BREAK_LABELS
from ..core.enums import BreakKey


@dataclass(frozen=True)
class BreakConfig:
    """Recurring daily break: start time (``HH:MM``) and length."""

    key: BreakKey
    time_of_day: Optional[str]
    duration_seconds: int

    @property
    def label(self) -> str:
        return BREAK_LABELS[self.key.value]


@dataclass(frozen=True)
class BreakOccurrence:
    """A BreakConfig projected into a concrete shift occurrence."""

    key: BreakKey
    start: datetime
    duration_seconds: int

    @property
    def end(self) -> datetime:
        return self.start + timedelta(seconds=self.duration_seconds)

    @property
    def label(self) -> str:
        return BREAK_LABELS[self.key.value]


@dataclass(frozen=True)
class ActiveBreakState:
    """A break that has been started manually or automatically."""

    key: BreakKey
    started_at: datetime

    def to_dict(self) -> dict:
        return {"key": self.key.value, "startedAt": to_epoch_ms(self.started_at)}

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveBreakState":
        return cls(key=BreakKey(data["key"]), started_at=from_epoch_ms(data["startedAt"]))


@dataclass(frozen=True)
class BreakLogEntry:
    log_id: int
    user_id: int
    key: BreakKey
    started_at: datetime
    ended_at: datetime
    duration_seconds: int

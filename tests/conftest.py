from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.break_tracker.break_tracker.breaks.model import ActiveBreakState, BreakLogEntry
from src.break_tracker.break_tracker.core.enums import BreakKey
from src.break_tracker.break_tracker.schedules.model import DailyShift, UserSettings


class InMemorySettings:
    def __init__(self, *items: UserSettings):
        self._by_user: dict[int, UserSettings] = {s.user_id: s for s in items}

    def get_for_user(self, user_id: int) -> Optional[UserSettings]:
        return self._by_user.get(user_id)

    def save(self, settings: UserSettings) -> None:
        self._by_user[settings.user_id] = settings


class InMemoryDailyShifts:
    def __init__(self, *items: DailyShift):
        self._by_key: dict[tuple[int, date], DailyShift] = {(s.user_id, s.shift_date): s for s in items}

    def get_for_user_and_date(self, *, user_id: int, shift_date: date) -> Optional[DailyShift]:
        return self._by_key.get((user_id, shift_date))

    def upsert(self, shift: DailyShift) -> None:
        self._by_key[(shift.user_id, shift.shift_date)] = shift

    def delete(self, *, user_id: int, shift_date: date) -> bool:
        return self._by_key.pop((user_id, shift_date), None) is not None


class InMemoryActiveBreaks:
    def __init__(self):
        self._by_user: dict[int, ActiveBreakState] = {}

    def get(self, user_id: int) -> Optional[ActiveBreakState]:
        return self._by_user.get(user_id)

    def set(self, user_id: int, state: ActiveBreakState) -> None:
        self._by_user[user_id] = state

    def clear(self, user_id: int) -> bool:
        return self._by_user.pop(user_id, None) is not None


class InMemoryBreakLog:
    def __init__(self):
        self.entries: list[BreakLogEntry] = []

    def append(self, *, user_id: int, key: BreakKey, started_at: datetime, ended_at: datetime, duration_seconds: int) -> int:
        log_id = len(self.entries) + 1
        self.entries.append(
            BreakLogEntry(
                log_id=log_id,
                user_id=user_id,
                key=key,
                started_at=started_at,
                ended_at=ended_at,
                duration_seconds=duration_seconds,
            )
        )
        return log_id

    def list_recent(self, user_id: int, limit: int):
        items = [e for e in self.entries if e.user_id == user_id]
        items.sort(key=lambda e: e.started_at, reverse=True)
        return items[:limit]


class RecordingNotifier:
    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))


@pytest.fixture
def settings_repo():
    return InMemorySettings()


@pytest.fixture
def daily_shifts_repo():
    return InMemoryDailyShifts()


@pytest.fixture
def active_breaks_repo():
    return InMemoryActiveBreaks()


@pytest.fixture
def break_log_repo():
    return InMemoryBreakLog()


@pytest.fixture
def notifier():
    return RecordingNotifier()

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DailyShift, UserSettings


class SettingsRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[UserSettings]:
        raise NotImplementedError

    def save(self, settings: UserSettings) -> None:
        raise NotImplementedError


class DailyShiftRepository(Protocol):
    def get_for_user_and_date(self, *, user_id: int, shift_date: date) -> Optional[DailyShift]:
        raise NotImplementedError

    def upsert(self, shift: DailyShift) -> None:
        """Create or replace the override for (user_id, shift_date)."""

        raise NotImplementedError

    def delete(self, *, user_id: int, shift_date: date) -> bool:
        raise NotImplementedError

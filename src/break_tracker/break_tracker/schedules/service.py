from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..breaks.model import BreakConfig
from ..common.validators import require_positive_int, require_time_of_day
from ..core.enums import BreakKey
from ..shifts.model import ShiftConfig
from .model import DailyShift, EffectiveSchedule, UserSettings
from .repository import DailyShiftRepository, SettingsRepository


class ScheduleService:
    def __init__(self, settings: SettingsRepository, daily_shifts: Optional[DailyShiftRepository] = None):
        self._settings = settings
        self._daily_shifts = daily_shifts

    def get_settings(self, user_id: int) -> UserSettings:
        return self._settings.get_for_user(int(user_id)) or UserSettings(user_id=int(user_id))

    def get_daily_shift(self, *, user_id: int, shift_date: date) -> Optional[DailyShift]:
        if not self._daily_shifts:
            return None
        return self._daily_shifts.get_for_user_and_date(user_id=int(user_id), shift_date=shift_date)

    def effective_config(self, *, user_id: int, work_date: date) -> EffectiveSchedule:
        """Merge global settings with the override for ``work_date``.

        Override fields win when set. An off day has no shift and no breaks.
        """

        settings = self.get_settings(user_id)
        daily = self.get_daily_shift(user_id=user_id, shift_date=work_date)

        if daily and daily.is_off_day:
            return EffectiveSchedule(shift=ShiftConfig(), breaks=[], is_off_day=True, notes=daily.notes)

        shift_start = settings.shift_start_time
        shift_end = settings.shift_end_time
        notes = None
        times = [settings.break1_time, settings.break2_time, settings.break3_time]
        durations = [settings.break1_duration, settings.break2_duration, settings.break3_duration]

        if daily:
            shift_start = daily.shift_start or shift_start
            shift_end = daily.shift_end or shift_end
            notes = daily.notes
            daily_times = [daily.break1_time, daily.break2_time, daily.break3_time]
            daily_durations = [daily.break1_duration, daily.break2_duration, daily.break3_duration]
            times = [d or t for d, t in zip(daily_times, times)]
            durations = [d or t for d, t in zip(daily_durations, durations)]

        breaks = [
            BreakConfig(key=key, time_of_day=t, duration_seconds=int(d))
            for key, t, d in zip(BreakKey, times, durations)
        ]
        return EffectiveSchedule(
            shift=ShiftConfig(start_time_of_day=shift_start, end_time_of_day=shift_end),
            breaks=breaks,
            notes=notes,
        )

    def save_settings(self, *, user_id: int, data: dict) -> UserSettings:
        """Validate and store the fields present in ``data``."""
        current = self.get_settings(user_id)
        changes: dict = {}

        for field_name in ("shift_start_time", "shift_end_time"):
            if field_name in data:
                changes[field_name] = require_time_of_day(data.get(field_name), field_name, required=False)

        for key in BreakKey:
            time_field = f"{key.value}_time"
            duration_field = f"{key.value}_duration"
            if time_field in data:
                changes[time_field] = require_time_of_day(data.get(time_field), time_field)
            if duration_field in data:
                changes[duration_field] = require_positive_int(data.get(duration_field), duration_field)

        updated = replace(current, **changes)
        self._settings.save(updated)
        return updated

    def save_daily_shift(self, *, user_id: int, shift_date: date, data: dict) -> DailyShift:
        if not self._daily_shifts:
            raise RuntimeError("Daily shift storage is not configured")

        values: dict = {
            "is_off_day": bool(data.get("is_off_day", False)),
            "shift_start": require_time_of_day(data.get("shift_start"), "shift_start", required=False),
            "shift_end": require_time_of_day(data.get("shift_end"), "shift_end", required=False),
            "notes": (data.get("notes") or "").strip() or None,
        }
        for key in BreakKey:
            time_field = f"{key.value}_time"
            duration_field = f"{key.value}_duration"
            values[time_field] = require_time_of_day(data.get(time_field), time_field, required=False)
            raw_duration = data.get(duration_field)
            values[duration_field] = (
                require_positive_int(raw_duration, duration_field) if raw_duration not in (None, "") else None
            )

        shift = DailyShift(user_id=int(user_id), shift_date=shift_date, **values)
        self._daily_shifts.upsert(shift)
        return shift

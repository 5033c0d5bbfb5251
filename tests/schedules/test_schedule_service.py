from datetime import date

import pytest

from src.break_tracker.break_tracker.core.enums import BreakKey
from src.break_tracker.break_tracker.core.exceptions import ValidationError
from src.break_tracker.break_tracker.schedules.model import DailyShift, UserSettings
from src.break_tracker.break_tracker.schedules.service import ScheduleService


DAY = date(2026, 2, 1)


def test_defaults_without_stored_settings(settings_repo, daily_shifts_repo):
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    schedule = svc.effective_config(user_id=1, work_date=DAY)

    assert schedule.shift.start_time_of_day is None
    assert [b.time_of_day for b in schedule.breaks] == ["11:00", "14:00", "17:00"]
    assert [b.duration_seconds for b in schedule.breaks] == [900, 1800, 900]


def test_daily_override_wins_over_settings(settings_repo, daily_shifts_repo):
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00", shift_end_time="18:00"))
    daily_shifts_repo.upsert(
        DailyShift(
            user_id=1,
            shift_date=DAY,
            shift_start="11:00",
            shift_end="20:00",
            break1_time="13:00",
            break2_time="15:10",
            break2_duration=20 * 60,
            notes="English Shift",
        )
    )
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    schedule = svc.effective_config(user_id=1, work_date=DAY)

    assert schedule.shift.start_time_of_day == "11:00"
    assert schedule.shift.end_time_of_day == "20:00"
    assert [b.time_of_day for b in schedule.breaks] == ["13:00", "15:10", "17:00"]
    assert schedule.durations()[BreakKey.BREAK2] == 1200
    assert schedule.notes == "English Shift"


def test_off_day_has_no_shift_and_no_breaks(settings_repo, daily_shifts_repo):
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00"))
    daily_shifts_repo.upsert(DailyShift(user_id=1, shift_date=DAY, is_off_day=True, notes="DayOff"))
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    schedule = svc.effective_config(user_id=1, work_date=DAY)

    assert schedule.is_off_day
    assert schedule.shift.start_time_of_day is None
    assert schedule.breaks == []


def test_save_settings_normalizes_and_validates(settings_repo, daily_shifts_repo):
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    saved = svc.save_settings(user_id=1, data={"shift_start_time": "7:05", "break2_duration": "1200"})

    assert saved.shift_start_time == "07:05"
    assert saved.break2_duration == 1200
    assert settings_repo.get_for_user(1) == saved

    with pytest.raises(ValidationError):
        svc.save_settings(user_id=1, data={"break1_time": "25:00"})
    with pytest.raises(ValidationError):
        svc.save_settings(user_id=1, data={"break3_duration": 0})


def test_clearing_shift_start_is_allowed(settings_repo, daily_shifts_repo):
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00"))
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    saved = svc.save_settings(user_id=1, data={"shift_start_time": ""})

    assert saved.shift_start_time is None


def test_save_daily_shift(settings_repo, daily_shifts_repo):
    svc = ScheduleService(settings_repo, daily_shifts_repo)

    shift = svc.save_daily_shift(
        user_id=1,
        shift_date=DAY,
        data={"shift_start": "07:00", "shift_end": "16:00", "break1_time": "08:50", "break1_duration": "900"},
    )

    assert shift.break1_duration == 900
    assert shift.break2_time is None
    assert daily_shifts_repo.get_for_user_and_date(user_id=1, shift_date=DAY) == shift

    with pytest.raises(ValidationError):
        svc.save_daily_shift(user_id=1, shift_date=DAY, data={"shift_start": "noon"})

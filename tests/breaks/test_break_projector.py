from datetime import datetime

from src.break_tracker.break_tracker.breaks.model import BreakConfig
from src.break_tracker.break_tracker.breaks.projector import next_break_after, next_raw_break, project_breaks
from src.break_tracker.break_tracker.core.enums import BreakKey
from src.break_tracker.break_tracker.shifts.model import ShiftOccurrence


def _breaks(t1, t2, t3):
    return [
        BreakConfig(key=BreakKey.BREAK1, time_of_day=t1, duration_seconds=900),
        BreakConfig(key=BreakKey.BREAK2, time_of_day=t2, duration_seconds=1800),
        BreakConfig(key=BreakKey.BREAK3, time_of_day=t3, duration_seconds=900),
    ]


DAY_SHIFT = ShiftOccurrence(start=datetime(2026, 2, 1, 8, 0), end=datetime(2026, 2, 1, 17, 0))
NIGHT_SHIFT = ShiftOccurrence(start=datetime(2026, 2, 1, 22, 0), end=datetime(2026, 2, 2, 6, 0))


def test_breaks_projected_in_order_and_end_boundary_is_kept():
    result = project_breaks(_breaks("13:00", "09:00", "17:00"), DAY_SHIFT)

    assert [b.start for b in result] == [
        datetime(2026, 2, 1, 9, 0),
        datetime(2026, 2, 1, 13, 0),
        datetime(2026, 2, 1, 17, 0),
    ]
    assert [b.key for b in result] == [BreakKey.BREAK2, BreakKey.BREAK1, BreakKey.BREAK3]


def test_break_outside_shift_is_dropped_not_clamped():
    result = project_breaks(_breaks("09:00", "13:00", "17:01"), DAY_SHIFT)

    assert [b.key for b in result] == [BreakKey.BREAK1, BreakKey.BREAK2]


def test_break_before_shift_start_moves_to_next_day():
    # 07:00 next day lies beyond the 17:00 end, so it is dropped as well
    result = project_breaks(_breaks("07:00", "10:00", None), DAY_SHIFT)

    assert [b.key for b in result] == [BreakKey.BREAK2]


def test_overnight_shift_breaks_after_midnight():
    result = project_breaks(_breaks("23:30", "02:00", "04:30"), NIGHT_SHIFT)

    assert [b.start for b in result] == [
        datetime(2026, 2, 1, 23, 30),
        datetime(2026, 2, 2, 2, 0),
        datetime(2026, 2, 2, 4, 30),
    ]


def test_ties_keep_slot_order():
    result = project_breaks(_breaks("12:00", "12:00", "10:00"), DAY_SHIFT)

    assert [b.key for b in result] == [BreakKey.BREAK3, BreakKey.BREAK1, BreakKey.BREAK2]


def test_blank_break_time_is_skipped_and_malformed_parts_degrade_to_zero():
    result = project_breaks(_breaks("", "10:xx", None), DAY_SHIFT)

    assert len(result) == 1
    assert result[0].key == BreakKey.BREAK2
    assert result[0].start == datetime(2026, 2, 1, 10, 0)


def test_occurrence_end_uses_duration():
    result = project_breaks(_breaks("09:00", "13:00", "16:00"), DAY_SHIFT)

    assert result[1].end == datetime(2026, 2, 1, 13, 30)


def test_next_break_is_strictly_after_now():
    breaks = _breaks("09:00", "13:00", "16:00")

    upcoming = next_break_after(breaks, DAY_SHIFT, datetime(2026, 2, 1, 9, 0))
    assert upcoming.key == BreakKey.BREAK2

    upcoming = next_break_after(breaks, DAY_SHIFT, datetime(2026, 2, 1, 8, 59, 59))
    assert upcoming.key == BreakKey.BREAK1


def test_no_next_break_after_the_last_one():
    assert next_break_after(_breaks("09:00", "13:00", "16:00"), DAY_SHIFT, datetime(2026, 2, 1, 16, 30)) is None


def test_raw_break_rolls_to_tomorrow():
    upcoming = next_raw_break(_breaks("09:00", "13:00", "17:00"), datetime(2026, 2, 1, 23, 0))

    assert upcoming.key == BreakKey.BREAK1
    assert upcoming.start == datetime(2026, 2, 2, 9, 0)


def test_raw_break_at_now_counts_as_passed():
    upcoming = next_raw_break(_breaks("09:00", "13:00", "17:00"), datetime(2026, 2, 1, 13, 0))

    assert upcoming.key == BreakKey.BREAK3


def test_raw_break_without_any_times():
    assert next_raw_break(_breaks(None, "", None), datetime(2026, 2, 1, 13, 0)) is None


def test_projection_is_repeatable():
    breaks = _breaks("23:30", "02:00", "04:30")
    assert project_breaks(breaks, NIGHT_SHIFT) == project_breaks(breaks, NIGHT_SHIFT)

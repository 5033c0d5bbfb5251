import threading
import time
from datetime import datetime, timedelta

import pytest

from src.break_tracker.break_tracker.breaks.service import BreakService
from src.break_tracker.break_tracker.core.enums import BreakKey, CountdownKind
from src.break_tracker.break_tracker.countdown.service import CountdownService
from src.break_tracker.break_tracker.schedules.model import UserSettings
from src.break_tracker.break_tracker.schedules.service import ScheduleService


@pytest.fixture
def services(settings_repo, daily_shifts_repo, active_breaks_repo, break_log_repo):
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00", shift_end_time="18:00"))
    schedules = ScheduleService(settings_repo, daily_shifts_repo)
    breaks = BreakService(active_breaks_repo, break_log_repo)
    return schedules, breaks


def test_snapshot_without_auto_start(services, notifier):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, notifier=notifier, auto_start_breaks=False)

    snap = svc.snapshot(1, now=datetime(2026, 2, 1, 10, 0))

    assert snap.state.text == "Next break in 01:00:00"
    assert snap.title is None
    assert notifier.sent == []


def test_settings_change_is_picked_up_on_next_call(services, settings_repo):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, auto_start_breaks=False)
    now = datetime(2026, 2, 1, 10, 0)

    assert svc.snapshot(1, now=now).state.text == "Next break in 01:00:00"
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00", shift_end_time="18:00", break1_time="10:30"))

    assert svc.snapshot(1, now=now).state.text == "Next break in 00:30:00"


def test_auto_start_shows_break_left(services, notifier):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, notifier=notifier, auto_start_breaks=True)

    snap = svc.snapshot(1, now=datetime(2026, 2, 1, 11, 5))

    assert snap.state.kind == CountdownKind.BREAK_LEFT
    assert snap.state.text == "Break left 00:10:00"
    assert notifier.sent == [("Break Started", "First Break has started")]


def test_expired_break_is_cleared_and_logged(services, notifier, break_log_repo):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, notifier=notifier, auto_start_breaks=False)
    started = datetime(2026, 2, 1, 11, 0)
    breaks.start_break(1, BreakKey.BREAK1, now=started)

    snap = svc.snapshot(1, now=started + timedelta(minutes=16))

    assert snap.state.kind == CountdownKind.NEXT_BREAK
    assert breaks.get_active(1) is None
    assert break_log_repo.entries[0].duration_seconds == 900
    assert ("Break Ended", "First Break has ended") in notifier.sent


def test_threshold_alert_fires_once(services, notifier):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, notifier=notifier, auto_start_breaks=False)

    first = svc.snapshot(1, now=datetime(2026, 2, 1, 10, 50, 0))
    second = svc.snapshot(1, now=datetime(2026, 2, 1, 10, 50, 1))

    assert first.title == "Next break in 10m"
    assert len(first.alerts) == 1
    assert second.alerts == []
    assert notifier.sent == [("Break Reminder", "First Break starts in 10 minutes")]


def test_reminders_for_the_current_shift(services):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, auto_start_breaks=False)

    reminders = svc.reminders(1, now=datetime(2026, 2, 1, 16, 0))

    assert [r.title for r in reminders] == ["Break Reminder", "Break Ending Soon", "Shift Ending Soon"]


class _SlowActiveBreaks:
    """Wraps the in-memory store and widens the gap between a read and the following clear."""

    def __init__(self, inner):
        self._inner = inner

    def get(self, user_id):
        state = self._inner.get(user_id)
        time.sleep(0.05)
        return state

    def set(self, user_id, state):
        self._inner.set(user_id, state)

    def clear(self, user_id):
        return self._inner.clear(user_id)


def test_concurrent_ticks_close_an_expired_break_once(settings_repo, daily_shifts_repo, active_breaks_repo, break_log_repo, notifier):
    settings_repo.save(UserSettings(user_id=1, shift_start_time="09:00", shift_end_time="18:00"))
    breaks = BreakService(_SlowActiveBreaks(active_breaks_repo), break_log_repo)
    svc = CountdownService(ScheduleService(settings_repo, daily_shifts_repo), breaks, notifier=notifier, auto_start_breaks=False)
    started = datetime(2026, 2, 1, 11, 0)
    breaks.start_break(1, BreakKey.BREAK1, now=started)

    now = started + timedelta(minutes=16)
    threads = [
        threading.Thread(target=svc.snapshot, args=(1,), kwargs={"now": now, "channel": channel})
        for channel in ("ticker", "api")
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)

    assert len(break_log_repo.entries) == 1
    assert [n for n in notifier.sent if n[0] == "Break Ended"] == [("Break Ended", "First Break has ended")]


def test_each_channel_gets_its_own_threshold_alert(services, notifier):
    schedules, breaks = services
    svc = CountdownService(schedules, breaks, notifier=notifier, auto_start_breaks=False)

    ticker = svc.snapshot(1, now=datetime(2026, 2, 1, 10, 49, 29), channel="ticker")
    api = svc.snapshot(1, now=datetime(2026, 2, 1, 10, 49, 30), channel="api", notify_alerts=False)

    assert [a.minutes for a in ticker.alerts] == [10]
    assert [a.minutes for a in api.alerts] == [10]
    assert notifier.sent == [("Break Reminder", "First Break starts in 10 minutes")]

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Tuple

from ..breaks.projector import project_breaks, raw_breaks_for_day
from ..breaks.service import BreakService
from ..core.constants import BREAK_LABELS
from ..core.enums import PostShiftPolicy
from ..schedules.service import ScheduleService
from ..shifts.resolver import resolve_shift_window
from .alerts import AlertTracker, Reminder, ThresholdAlert, plan_reminders, title_alert
from .formatter import compute_countdown
from .model import CountdownState

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None:
        raise NotImplementedError


class LoggingNotifier:
    """Default notifier: alerts go to the application log."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    def notify(self, title: str, body: str) -> None:
        self._log.info("%s: %s", title, body)


@dataclass(frozen=True)
class CountdownSnapshot:
    state: CountdownState
    title: Optional[str] = None
    alerts: List[ThresholdAlert] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.state.to_dict()
        data["title"] = self.title
        data["alerts"] = [{"title": a.title, "body": a.body, "minutes": a.minutes} for a in self.alerts]
        return data


class CountdownService:
    """Host side of the countdown: one call per tick.

    Reads the schedule and the active break fresh on every call, so settings
    edits show up on the next tick. Calls for the same user are serialized;
    each ``channel`` (background ticker, HTTP polling) gets its own alerts.
    """

    def __init__(
        self,
        schedules: ScheduleService,
        breaks: BreakService,
        *,
        notifier: Optional[Notifier] = None,
        auto_start_breaks: bool = True,
        post_shift_policy: PostShiftPolicy = PostShiftPolicy.RESOLVE,
    ):
        self._schedules = schedules
        self._breaks = breaks
        self._notifier = notifier or LoggingNotifier()
        self._auto_start = bool(auto_start_breaks)
        self._policy = PostShiftPolicy(post_shift_policy)
        self._trackers: Dict[Tuple[int, str], AlertTracker] = {}
        self._user_locks: Dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, user_id: int) -> threading.Lock:
        with self._guard:
            return self._user_locks.setdefault(user_id, threading.Lock())

    def snapshot(
        self,
        user_id: int,
        *,
        now: datetime,
        channel: str = "default",
        notify_alerts: bool = True,
    ) -> CountdownSnapshot:
        """Evaluate one tick for ``user_id``.

        Threshold alerts are returned on the snapshot and, unless
        ``notify_alerts`` is off, also handed to the notifier.
        """

        with self._lock_for(int(user_id)):
            return self._snapshot(int(user_id), now, channel, notify_alerts)

    def _snapshot(self, user_id: int, now: datetime, channel: str, notify_alerts: bool) -> CountdownSnapshot:
        schedule = self._schedules.effective_config(user_id=user_id, work_date=now.date())
        occurrence = resolve_shift_window(schedule.shift, now)

        if self._auto_start:
            if occurrence is not None:
                scheduled = project_breaks(schedule.breaks, occurrence)
            else:
                scheduled = raw_breaks_for_day(schedule.breaks, now)
            started = self._breaks.auto_start(user_id, now=now, occurrences=scheduled)
            if started is not None:
                self._notifier.notify("Break Started", f"{BREAK_LABELS[started.key.value]} has started")

        state = compute_countdown(
            now,
            schedule.shift,
            schedule.breaks,
            self._breaks.get_active(user_id),
            occurrence=occurrence,
            post_shift_policy=self._policy,
        )

        if state.expired_break is not None:
            entry = self._breaks.expire_if_elapsed(user_id, now=now, durations=schedule.durations())
            if entry is not None:
                self._notifier.notify("Break Ended", f"{BREAK_LABELS[entry.key.value]} has ended")

        tracker = self._trackers.setdefault((user_id, channel), AlertTracker())
        alerts = tracker.poll(state)
        for alert in alerts if notify_alerts else ():
            self._notifier.notify(alert.title, alert.body)

        return CountdownSnapshot(state=state, title=title_alert(state), alerts=alerts)

    def reminders(self, user_id: int, *, now: datetime) -> List[Reminder]:
        schedule = self._schedules.effective_config(user_id=user_id, work_date=now.date())
        occurrence = resolve_shift_window(schedule.shift, now)
        if occurrence is None:
            return plan_reminders(now, None, raw_breaks_for_day(schedule.breaks, now))
        return plan_reminders(now, occurrence, project_breaks(schedule.breaks, occurrence))

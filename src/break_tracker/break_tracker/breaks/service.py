from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import format_hms
from ..common.validators import require_break_key
from ..core.constants import DEFAULT_BREAK_DURATIONS, DEFAULT_HISTORY_LIMIT
from ..core.enums import BreakKey
from ..core.exceptions import ValidationError
from .model import ActiveBreakState, BreakLogEntry, BreakOccurrence
from .repository import ActiveBreakRepository, BreakLogRepository

logger = logging.getLogger(__name__)


class BreakService:
    """Owns the active-break state: start, end, expiry and the break log."""

    def __init__(self, active: ActiveBreakRepository, log: BreakLogRepository):
        self._active = active
        self._log = log

    def get_active(self, user_id: int) -> Optional[ActiveBreakState]:
        return self._active.get(int(user_id))

    def start_break(self, user_id: int, key, *, now: datetime) -> ActiveBreakState:
        break_key = require_break_key(key)
        if self._active.get(int(user_id)):
            raise ValidationError("A break is already running")

        state = ActiveBreakState(key=break_key, started_at=now)
        self._active.set(int(user_id), state)
        logger.info("user %s started %s at %s", user_id, break_key.value, now.isoformat())
        return state

    def end_break(self, user_id: int, *, now: datetime) -> BreakLogEntry:
        state = self._active.get(int(user_id))
        if not state:
            raise ValidationError("No break is running")
        entry = self._finish(int(user_id), state, now)
        if entry is None:
            raise ValidationError("No break is running")
        return entry

    def expire_if_elapsed(
        self,
        user_id: int,
        *,
        now: datetime,
        durations: Mapping[BreakKey, int],
    ) -> Optional[BreakLogEntry]:
        """Close the running break once its full duration has passed.

        The log records the scheduled length, not the moment this ran.
        """

        state = self._active.get(int(user_id))
        if not state:
            return None

        duration = int(durations.get(state.key, DEFAULT_BREAK_DURATIONS[state.key.value]))
        elapsed = (now - state.started_at).total_seconds()
        if elapsed < duration:
            return None

        entry = self._finish(int(user_id), state, now, duration_seconds=duration)
        if entry is None:
            return None
        logger.info("user %s break %s expired", user_id, state.key.value)
        return entry

    def auto_start(
        self,
        user_id: int,
        *,
        now: datetime,
        occurrences: Iterable[BreakOccurrence],
    ) -> Optional[ActiveBreakState]:
        """Start the scheduled break whose window contains ``now``.

        Does nothing while another break is running, and never restarts a
        break that was already taken (ended) in this window.
        """

        if self._active.get(int(user_id)):
            return None

        recent = self._log.list_recent(int(user_id), len(BreakKey) * 2)
        for item in occurrences:
            if not (item.start <= now < item.end):
                continue
            if any(e.key == item.key and e.ended_at >= item.start for e in recent):
                continue
            state = ActiveBreakState(key=item.key, started_at=item.start)
            self._active.set(int(user_id), state)
            logger.info("user %s auto-started %s", user_id, item.key.value)
            return state
        return None

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[BreakLogEntry]:
        return self._log.list_recent(int(user_id), int(limit))

    def history_ui(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [self._to_ui(e) for e in self.history(user_id, limit=limit)]

    def _finish(
        self,
        user_id: int,
        state: ActiveBreakState,
        now: datetime,
        *,
        duration_seconds: Optional[int] = None,
    ) -> Optional[BreakLogEntry]:
        if duration_seconds is None:
            duration_seconds = max(0, round((now - state.started_at).total_seconds()))

        # Another caller already closed this break.
        if not self._active.clear(user_id):
            return None
        log_id = self._log.append(
            user_id=user_id,
            key=state.key,
            started_at=state.started_at,
            ended_at=now,
            duration_seconds=duration_seconds,
        )
        return BreakLogEntry(
            log_id=log_id,
            user_id=user_id,
            key=state.key,
            started_at=state.started_at,
            ended_at=now,
            duration_seconds=duration_seconds,
        )

    def _to_ui(self, e: BreakLogEntry) -> dict:
        return {
            "key": e.key.value,
            "date": e.started_at.strftime("%Y-%m-%d"),
            "start": e.started_at.strftime("%H:%M:%S"),
            "end": e.ended_at.strftime("%H:%M:%S"),
            "duration": format_hms(e.duration_seconds),
            "duration_seconds": e.duration_seconds,
        }

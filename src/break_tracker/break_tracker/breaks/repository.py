from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BreakKey
from .model import ActiveBreakState, BreakLogEntry


class ActiveBreakRepository(Protocol):
    def get(self, user_id: int) -> Optional[ActiveBreakState]:
        raise NotImplementedError

    def set(self, user_id: int, state: ActiveBreakState) -> None:
        raise NotImplementedError

    def clear(self, user_id: int) -> bool:
        raise NotImplementedError


class BreakLogRepository(Protocol):
    def append(
        self,
        *,
        user_id: int,
        key: BreakKey,
        started_at: datetime,
        ended_at: datetime,
        duration_seconds: int,
    ) -> int:
        """Store a finished break. Returns log_id."""

        raise NotImplementedError

    def list_recent(self, user_id: int, limit: int) -> Sequence[BreakLogEntry]:
        raise NotImplementedError

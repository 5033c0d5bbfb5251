from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import BreakKey
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActiveBreakState, BreakLogEntry
from .repository import ActiveBreakRepository, BreakLogRepository


class MySQLActiveBreakRepository(ActiveBreakRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int) -> Optional[ActiveBreakState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT break_key, started_at FROM active_breaks WHERE user_id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ActiveBreakState(key=BreakKey(r["break_key"]), started_at=r["started_at"])

    def set(self, user_id: int, state: ActiveBreakState) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO active_breaks(user_id, break_key, started_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE break_key=VALUES(break_key), started_at=VALUES(started_at)
                """,
                (int(user_id), state.key.value, state.started_at),
            )

    def clear(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM active_breaks WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0


class MySQLBreakLogRepository(BreakLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        user_id: int,
        key: BreakKey,
        started_at: datetime,
        ended_at: datetime,
        duration_seconds: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO break_log(user_id, break_key, started_at, ended_at, duration_seconds)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), key.value, started_at, ended_at, int(duration_seconds)),
            )
            return int(cur.lastrowid or 0)

    def list_recent(self, user_id: int, limit: int) -> Sequence[BreakLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, break_key, started_at, ended_at, duration_seconds
                FROM break_log
                WHERE user_id=%s
                ORDER BY started_at DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                BreakLogEntry(
                    log_id=int(r["log_id"]),
                    user_id=int(r["user_id"]),
                    key=BreakKey(r["break_key"]),
                    started_at=r["started_at"],
                    ended_at=r["ended_at"],
                    duration_seconds=int(r["duration_seconds"]),
                )
                for r in fetchall(cur)
            ]

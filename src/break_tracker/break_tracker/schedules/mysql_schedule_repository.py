from __future__ import annotations

from datetime import date, time
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import DailyShift, UserSettings
from .repository import DailyShiftRepository, SettingsRepository


def _hhmm(value: Any) -> Optional[str]:
    t: Optional[time] = normalize_mysql_time(value)
    return t.strftime("%H:%M") if t else None


def _int_or_none(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: int) -> Optional[UserSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, shift_start_time, shift_end_time,
                       break1_time, break2_time, break3_time,
                       break1_duration, break2_duration, break3_duration
                FROM user_settings
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            defaults = UserSettings(user_id=int(r["user_id"]))
            return UserSettings(
                user_id=int(r["user_id"]),
                shift_start_time=_hhmm(r.get("shift_start_time")),
                shift_end_time=_hhmm(r.get("shift_end_time")),
                break1_time=_hhmm(r.get("break1_time")) or defaults.break1_time,
                break2_time=_hhmm(r.get("break2_time")) or defaults.break2_time,
                break3_time=_hhmm(r.get("break3_time")) or defaults.break3_time,
                break1_duration=int(r.get("break1_duration") or defaults.break1_duration),
                break2_duration=int(r.get("break2_duration") or defaults.break2_duration),
                break3_duration=int(r.get("break3_duration") or defaults.break3_duration),
            )

    def save(self, settings: UserSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_settings(
                    user_id, shift_start_time, shift_end_time,
                    break1_time, break2_time, break3_time,
                    break1_duration, break2_duration, break3_duration
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    shift_start_time=VALUES(shift_start_time),
                    shift_end_time=VALUES(shift_end_time),
                    break1_time=VALUES(break1_time),
                    break2_time=VALUES(break2_time),
                    break3_time=VALUES(break3_time),
                    break1_duration=VALUES(break1_duration),
                    break2_duration=VALUES(break2_duration),
                    break3_duration=VALUES(break3_duration)
                """,
                (
                    int(settings.user_id),
                    settings.shift_start_time,
                    settings.shift_end_time,
                    settings.break1_time,
                    settings.break2_time,
                    settings.break3_time,
                    int(settings.break1_duration),
                    int(settings.break2_duration),
                    int(settings.break3_duration),
                ),
            )


class MySQLDailyShiftRepository(DailyShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, *, user_id: int, shift_date: date) -> Optional[DailyShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, shift_date, is_off_day, shift_start, shift_end,
                       break1_time, break2_time, break3_time,
                       break1_duration, break2_duration, break3_duration, notes
                FROM daily_shifts
                WHERE user_id=%s AND shift_date=%s
                """,
                (int(user_id), shift_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return DailyShift(
                user_id=int(r["user_id"]),
                shift_date=r["shift_date"],
                is_off_day=bool(r.get("is_off_day")),
                shift_start=_hhmm(r.get("shift_start")),
                shift_end=_hhmm(r.get("shift_end")),
                break1_time=_hhmm(r.get("break1_time")),
                break2_time=_hhmm(r.get("break2_time")),
                break3_time=_hhmm(r.get("break3_time")),
                break1_duration=_int_or_none(r.get("break1_duration")),
                break2_duration=_int_or_none(r.get("break2_duration")),
                break3_duration=_int_or_none(r.get("break3_duration")),
                notes=r.get("notes"),
            )

    def upsert(self, shift: DailyShift) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_shifts(
                    user_id, shift_date, is_off_day, shift_start, shift_end,
                    break1_time, break2_time, break3_time,
                    break1_duration, break2_duration, break3_duration, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    is_off_day=VALUES(is_off_day),
                    shift_start=VALUES(shift_start),
                    shift_end=VALUES(shift_end),
                    break1_time=VALUES(break1_time),
                    break2_time=VALUES(break2_time),
                    break3_time=VALUES(break3_time),
                    break1_duration=VALUES(break1_duration),
                    break2_duration=VALUES(break2_duration),
                    break3_duration=VALUES(break3_duration),
                    notes=VALUES(notes)
                """,
                (
                    int(shift.user_id),
                    shift.shift_date,
                    1 if shift.is_off_day else 0,
                    shift.shift_start,
                    shift.shift_end,
                    shift.break1_time,
                    shift.break2_time,
                    shift.break3_time,
                    shift.break1_duration,
                    shift.break2_duration,
                    shift.break3_duration,
                    shift.notes,
                ),
            )

    def delete(self, *, user_id: int, shift_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM daily_shifts WHERE user_id=%s AND shift_date=%s",
                (int(user_id), shift_date),
            )
            return cur.rowcount > 0

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .breaks.mysql_break_repository import MySQLActiveBreakRepository, MySQLBreakLogRepository
from .breaks.repository import ActiveBreakRepository, BreakLogRepository
from .breaks.service import BreakService
from .common.datetime_utils import now_local
from .core.enums import PostShiftPolicy
from .countdown.service import CountdownService, Notifier
from .database.connection import DBConfig, DatabaseConnection
from .schedules.mysql_schedule_repository import MySQLDailyShiftRepository, MySQLSettingsRepository
from .schedules.repository import DailyShiftRepository, SettingsRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    settings_repo: SettingsRepository
    daily_shifts_repo: DailyShiftRepository
    active_breaks_repo: ActiveBreakRepository
    break_log_repo: BreakLogRepository

    schedule_service: ScheduleService
    break_service: BreakService
    countdown_service: CountdownService

    clock: Callable[[], datetime] = now_local


def build_services(
    *,
    settings_repo: SettingsRepository,
    daily_shifts_repo: DailyShiftRepository,
    active_breaks_repo: ActiveBreakRepository,
    break_log_repo: BreakLogRepository,
    notifier: Notifier | None = None,
    auto_start_breaks: bool = True,
    post_shift_policy: str = PostShiftPolicy.RESOLVE.value,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    schedule_service = ScheduleService(settings_repo, daily_shifts_repo)
    break_service = BreakService(active_breaks_repo, break_log_repo)
    countdown_service = CountdownService(
        schedule_service,
        break_service,
        notifier=notifier,
        auto_start_breaks=auto_start_breaks,
        post_shift_policy=PostShiftPolicy(post_shift_policy),
    )

    return Container(
        settings_repo=settings_repo,
        daily_shifts_repo=daily_shifts_repo,
        active_breaks_repo=active_breaks_repo,
        break_log_repo=break_log_repo,
        schedule_service=schedule_service,
        break_service=break_service,
        countdown_service=countdown_service,
        clock=clock,
    )


def build_container(*, db_config: dict, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        settings_repo=MySQLSettingsRepository(conn),
        daily_shifts_repo=MySQLDailyShiftRepository(conn),
        active_breaks_repo=MySQLActiveBreakRepository(conn),
        break_log_repo=MySQLBreakLogRepository(conn),
        **options,
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_SCHOOL_YEARS_AHEAD
from .database.connection import DBConfig, DatabaseConnection
from .periods.mysql_period_repository import MySQLPeriodRepository
from .periods.repository import PeriodRepository
from .periods.service import PeriodService
from .timetracking.mysql_schedule_repository import MySQLWorkScheduleRepository
from .timetracking.mysql_time_event_repository import MySQLTimeEventRepository
from .timetracking.repository import TimeEventRepository, WorkScheduleRepository
from .timetracking.service import TimeTrackingService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    time_events_repo: TimeEventRepository
    work_schedules_repo: WorkScheduleRepository
    periods_repo: PeriodRepository

    time_tracking_service: TimeTrackingService
    period_service: PeriodService

    school_years_ahead: int = DEFAULT_SCHOOL_YEARS_AHEAD
    tz_name: Optional[str] = None


def build_container(
    *,
    db_config: dict,
    tz_name: Optional[str] = None,
    school_years_ahead: int = DEFAULT_SCHOOL_YEARS_AHEAD,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    time_events_repo = MySQLTimeEventRepository(conn)
    work_schedules_repo = MySQLWorkScheduleRepository(conn)
    periods_repo = MySQLPeriodRepository(conn)

    return Container(
        conn=conn,
        time_events_repo=time_events_repo,
        work_schedules_repo=work_schedules_repo,
        periods_repo=periods_repo,
        time_tracking_service=TimeTrackingService(time_events_repo, work_schedules_repo, tz_name=tz_name),
        period_service=PeriodService(periods_repo),
        school_years_ahead=int(school_years_ahead),
        tz_name=tz_name,
    )

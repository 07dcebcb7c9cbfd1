from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DaySchedule
from .repository import WorkScheduleRepository


class MySQLWorkScheduleRepository(WorkScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_subject(self, *, subject_id: str, start: date, end: date) -> Sequence[DaySchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, center_id, work_date, planned_minutes
                FROM work_schedules
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (str(subject_id), start, end),
            )
            return [
                DaySchedule(
                    subject_id=str(r["user_id"]),
                    date=r["work_date"],
                    planned_minutes=int(r["planned_minutes"] or 0),
                    center_id=r.get("center_id"),
                    schedule_id=int(r["schedule_id"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(
        self,
        *,
        subject_id: str,
        work_date: date,
        planned_minutes: int,
        center_id: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(user_id, center_id, work_date, planned_minutes)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE planned_minutes=VALUES(planned_minutes), updated_at=CURRENT_TIMESTAMP
                """,
                (str(subject_id), center_id, work_date, int(planned_minutes)),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT schedule_id FROM work_schedules WHERE user_id=%s AND work_date=%s",
                (str(subject_id), work_date),
            )
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

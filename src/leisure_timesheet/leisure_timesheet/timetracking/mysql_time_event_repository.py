from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TimeEventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TimeEvent
from .repository import TimeEventRepository


def _row_to_event(r: dict) -> TimeEvent:
    return TimeEvent(
        subject_id=str(r["user_id"]),
        kind=TimeEventKind.parse(r["entry_type"]) or r["entry_type"],
        occurred_at=r["occurred_at"],
        center_id=r.get("center_id"),
        event_id=int(r["entry_id"]),
    )


class MySQLTimeEventRepository(TimeEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_subject(self, *, subject_id: str, start: date, end: date) -> Sequence[TimeEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, center_id, entry_type, occurred_at
                FROM time_entries
                WHERE user_id=%s AND entry_date BETWEEN %s AND %s
                ORDER BY occurred_at ASC, entry_id ASC
                """,
                (str(subject_id), start, end),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def list_for_subjects_on(self, *, subject_ids: Sequence[str], day: date) -> Sequence[TimeEvent]:
        if not subject_ids:
            return []

        placeholders = ", ".join(["%s"] * len(subject_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT entry_id, user_id, center_id, entry_type, occurred_at
                FROM time_entries
                WHERE entry_date=%s AND user_id IN ({placeholders})
                ORDER BY occurred_at ASC, entry_id ASC
                """,
                (day, *[str(s) for s in subject_ids]),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        subject_id: str,
        kind: TimeEventKind,
        occurred_at: datetime,
        work_date: date,
        center_id: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, center_id, entry_type, entry_date, occurred_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (str(subject_id), center_id, TimeEventKind(kind).value, work_date, occurred_at),
            )
            return int(cur.lastrowid or 0)

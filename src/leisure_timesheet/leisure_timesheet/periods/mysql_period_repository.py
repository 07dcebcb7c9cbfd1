from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Period
from .repository import PeriodRepository


class MySQLPeriodRepository(PeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        center_id: str,
        name: str,
        period_type: PeriodType,
        start_date: date,
        end_date: date,
        school_year_id: Optional[str] = None,
        animator_ids: Sequence[str] = (),
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, center_id, name, period_type, start_date, end_date, school_year_id, animator_ids)

    def create_many(
        self,
        *,
        center_id: str,
        period_type: PeriodType,
        ranges: Sequence[tuple[str, date, date]],
        school_year_id: Optional[str] = None,
        animator_ids: Sequence[str] = (),
    ) -> list[int]:
        # Single transaction: a failed insert rolls back the earlier ones.
        with db_cursor(self._conn_factory) as (_, cur):
            return [
                self._insert(cur, center_id, name, period_type, start, end, school_year_id, animator_ids)
                for name, start, end in ranges
            ]

    @staticmethod
    def _insert(cur, center_id, name, period_type, start_date, end_date, school_year_id, animator_ids) -> int:
        cur.execute(
            """
            INSERT INTO periods(center_id, name, period_type, start_date, end_date, school_year_id)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (center_id, name, PeriodType(period_type).value, start_date, end_date, school_year_id),
        )
        period_id = int(cur.lastrowid)
        if animator_ids:
            cur.executemany(
                "INSERT INTO period_animators(period_id, user_id) VALUES(%s,%s)",
                [(period_id, str(a)) for a in animator_ids],
            )
        return period_id

    def delete(self, *, period_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM period_animators WHERE period_id=%s", (int(period_id),))
            cur.execute("DELETE FROM periods WHERE period_id=%s", (int(period_id),))
            return cur.rowcount > 0

    def list_for_center(self, *, center_id: str, school_year_id: Optional[str] = None) -> Sequence[Period]:
        clauses = ["p.center_id=%s"]
        params: list[object] = [center_id]
        if school_year_id is not None:
            clauses.append("p.school_year_id=%s")
            params.append(school_year_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    p.period_id,
                    p.center_id,
                    p.name,
                    p.period_type,
                    p.start_date,
                    p.end_date,
                    p.school_year_id,
                    GROUP_CONCAT(pa.user_id ORDER BY pa.user_id) AS animator_ids
                FROM periods p
                LEFT JOIN period_animators pa ON pa.period_id = p.period_id
                WHERE {where}
                GROUP BY p.period_id
                ORDER BY p.start_date ASC, p.period_id ASC
                """,
                tuple(params),
            )
            return [
                Period(
                    period_id=int(r["period_id"]),
                    center_id=r["center_id"],
                    name=r["name"],
                    period_type=PeriodType(r["period_type"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    school_year_id=r.get("school_year_id"),
                    animator_ids=tuple(r["animator_ids"].split(",")) if r.get("animator_ids") else (),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

from datetime import date

import pytest

from src.leisure_timesheet.leisure_timesheet.core.enums import PeriodType
from src.leisure_timesheet.leisure_timesheet.periods.mysql_period_repository import MySQLPeriodRepository


class FakeCursor:
    def __init__(self, fail_on_insert=None):
        self.fail_on_insert = fail_on_insert
        self.period_inserts = 0
        self.lastrowid = None
        self.animator_rows = []

    def execute(self, sql, params=()):
        if "INSERT INTO periods" in sql:
            self.period_inserts += 1
            if self.period_inserts == self.fail_on_insert:
                raise RuntimeError("insert failed")
            self.lastrowid = 100 + self.period_inserts

    def executemany(self, sql, rows):
        self.animator_rows.extend(rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor):
        self.connections: list[FakeConnection] = []
        self._cursor = cursor

    def connect(self, with_database=True):
        conn = FakeConnection(self._cursor)
        self.connections.append(conn)
        return conn


RANGES = [
    ("Toussaint - Week 1", date(2024, 10, 19), date(2024, 10, 25)),
    ("Toussaint - Week 2", date(2024, 10, 26), date(2024, 11, 1)),
    ("Toussaint - Week 3", date(2024, 11, 2), date(2024, 11, 4)),
]


def test_create_many_uses_one_transaction():
    cur = FakeCursor()
    factory = FakeConnFactory(cur)
    repo = MySQLPeriodRepository(factory)

    ids = repo.create_many(
        center_id="center-1",
        period_type=PeriodType.VACATION,
        ranges=RANGES,
        animator_ids=["a"],
    )

    assert ids == [101, 102, 103]
    assert len(factory.connections) == 1
    assert factory.connections[0].commits == 1
    assert cur.animator_rows == [(101, "a"), (102, "a"), (103, "a")]


def test_create_many_rolls_back_when_an_insert_fails():
    factory = FakeConnFactory(FakeCursor(fail_on_insert=3))
    repo = MySQLPeriodRepository(factory)

    with pytest.raises(RuntimeError):
        repo.create_many(center_id="center-1", period_type=PeriodType.VACATION, ranges=RANGES)

    (conn,) = factory.connections
    assert conn.commits == 0
    assert conn.rollbacks == 1

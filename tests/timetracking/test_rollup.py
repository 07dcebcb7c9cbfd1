from datetime import date

import pytest

from src.leisure_timesheet.leisure_timesheet.core.exceptions import ValidationError
from src.leisure_timesheet.leisure_timesheet.timetracking.formatting import format_minutes, planned_minutes_from
from src.leisure_timesheet.leisure_timesheet.timetracking.model import DailyAggregate, DaySchedule
from src.leisure_timesheet.leisure_timesheet.timetracking.rollup import daily_balances, rollup_period


def _agg(day: int, minutes: int) -> DailyAggregate:
    return DailyAggregate(date=date(2024, 10, day), subject_id="a", worked_minutes=minutes, is_open_ended=False)


def _plan(day: int, minutes: int) -> DaySchedule:
    return DaySchedule(subject_id="a", date=date(2024, 10, day), planned_minutes=minutes)


def test_rollup_zero_fills_missing_sides():
    aggregates = [_agg(1, 300), _agg(3, 120)]
    schedules = [_plan(1, 240), _plan(2, 420)]

    r = rollup_period(aggregates, schedules, date(2024, 10, 1), date(2024, 10, 31))

    assert r.planned_minutes == 660
    assert r.actual_minutes == 420
    assert r.difference_minutes == -240


def test_rollup_is_order_independent():
    aggregates = [_agg(1, 300), _agg(3, 120), _agg(5, 61)]
    schedules = [_plan(1, 240), _plan(2, 420)]
    start, end = date(2024, 10, 1), date(2024, 10, 31)

    assert rollup_period(aggregates, schedules, start, end) == rollup_period(
        list(reversed(aggregates)), list(reversed(schedules)), start, end
    )


def test_rollup_ignores_entries_outside_range():
    r = rollup_period([_agg(1, 300), _agg(10, 60)], [_plan(10, 30)], date(2024, 10, 2), date(2024, 10, 10))

    assert (r.planned_minutes, r.actual_minutes, r.difference_minutes) == (30, 60, 30)


def test_rollup_empty():
    r = rollup_period([], [], date(2024, 10, 1), date(2024, 10, 7))

    assert (r.planned_minutes, r.actual_minutes, r.difference_minutes) == (0, 0, 0)


def test_daily_balances_has_a_row_per_day():
    rows = daily_balances([_agg(2, 90)], [_plan(3, 60)], date(2024, 10, 1), date(2024, 10, 3))

    assert [(b.date.day, b.planned_minutes, b.actual_minutes, b.difference_minutes) for b in rows] == [
        (1, 0, 0, 0),
        (2, 0, 90, 90),
        (3, 60, 0, -60),
    ]


@pytest.mark.parametrize(
    "minutes, text",
    [(0, "0h00"), (5, "0h05"), (480, "8h00"), (435, "7h15"), (-65, "-1h05"), (-5, "-0h05"), (6000, "100h00")],
)
def test_format_minutes(minutes, text):
    assert format_minutes(minutes) == text


def test_planned_minutes_from_hours_and_minutes():
    assert planned_minutes_from(7, 30) == 450
    assert planned_minutes_from("2", "05") == 125

    with pytest.raises(ValidationError):
        planned_minutes_from(-1, 0)
    with pytest.raises(ValidationError):
        planned_minutes_from(1, 60)
    with pytest.raises(ValidationError):
        planned_minutes_from("x", 0)

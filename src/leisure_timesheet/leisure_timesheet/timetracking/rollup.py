from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable

from ..common.datetime_utils import iter_days
from .model import DailyAggregate, DayBalance, DaySchedule, PeriodRollup


def _planned_by_day(schedules: Iterable[DaySchedule], start: date, end: date) -> Counter:
    planned: Counter = Counter()
    for s in schedules:
        if start <= s.date <= end:
            planned[s.date] += int(s.planned_minutes)
    return planned


def _actual_by_day(aggregates: Iterable[DailyAggregate], start: date, end: date) -> Counter:
    actual: Counter = Counter()
    for a in aggregates:
        if start <= a.date <= end:
            actual[a.date] += int(a.worked_minutes)
    return actual


def rollup_period(
    aggregates: Iterable[DailyAggregate],
    schedules: Iterable[DaySchedule],
    range_start: date,
    range_end: date,
) -> PeriodRollup:
    """Planned vs. actual totals over an inclusive date range.

    A date missing from either side counts as zero on that side. Entries
    outside the range are ignored.
    """
    planned = sum(_planned_by_day(schedules, range_start, range_end).values())
    actual = sum(_actual_by_day(aggregates, range_start, range_end).values())
    return PeriodRollup(
        range_start=range_start,
        range_end=range_end,
        planned_minutes=planned,
        actual_minutes=actual,
        difference_minutes=actual - planned,
    )


def daily_balances(
    aggregates: Iterable[DailyAggregate],
    schedules: Iterable[DaySchedule],
    range_start: date,
    range_end: date,
) -> list[DayBalance]:
    """One row per calendar day of the range, zero-filled."""
    planned = _planned_by_day(schedules, range_start, range_end)
    actual = _actual_by_day(aggregates, range_start, range_end)
    return [
        DayBalance(date=day, planned_minutes=planned[day], actual_minutes=actual[day])
        for day in iter_days(range_start, range_end)
    ]

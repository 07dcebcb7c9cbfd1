from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DAYS_PER_WEEK, SECONDS_PER_MINUTE, WEEK_STARTS_ON


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def local_date(moment: datetime, tz_name: Optional[str] = None) -> date:
    """Calendar date of a timestamp in the given zone.

    Naive timestamps are already local and are returned as-is.
    """
    if moment.tzinfo is not None and tz_name:
        return moment.astimezone(ZoneInfo(tz_name)).date()
    return moment.date()


def today_local(tz_name: Optional[str] = None) -> date:
    """Today's calendar date in the given zone (server local time when unset)."""
    return local_date(now_local(tz_name), tz_name)


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Truncated minutes from start to end, never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // SECONDS_PER_MINUTE)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_bounds(day: date) -> tuple[date, date]:
    offset = (day.weekday() - WEEK_STARTS_ON) % DAYS_PER_WEEK
    start = day - timedelta(days=offset)
    return start, start + timedelta(days=DAYS_PER_WEEK - 1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)

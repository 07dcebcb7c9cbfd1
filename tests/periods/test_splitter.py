from datetime import date, timedelta

import pytest

from src.leisure_timesheet.leisure_timesheet.core.exceptions import ValidationError
from src.leisure_timesheet.leisure_timesheet.periods.model import VacationRange
from src.leisure_timesheet.leisure_timesheet.periods.splitter import split_vacation_range


def test_toussaint_splits_into_three_weeks():
    vacation = VacationRange(label="Toussaint", start=date(2024, 10, 19), end=date(2024, 11, 4))

    subs = split_vacation_range(vacation, True)

    assert [(s.label, s.start, s.end, s.days) for s in subs] == [
        ("Toussaint - Week 1", date(2024, 10, 19), date(2024, 10, 25), 7),
        ("Toussaint - Week 2", date(2024, 10, 26), date(2024, 11, 1), 7),
        ("Toussaint - Week 3", date(2024, 11, 2), date(2024, 11, 4), 3),
    ]


def test_no_split_returns_range_verbatim():
    vacation = VacationRange(label="Hiver", start=date(2025, 2, 10), end=date(2025, 2, 26))

    subs = split_vacation_range(vacation, False)

    assert len(subs) == 1
    assert (subs[0].label, subs[0].start, subs[0].end) == ("Hiver", vacation.start, vacation.end)


def test_short_range_gives_single_week():
    vacation = VacationRange(label="Pont", start=date(2025, 5, 1), end=date(2025, 5, 4))

    subs = split_vacation_range(vacation, True)

    assert [(s.label, s.start, s.end) for s in subs] == [("Pont - Week 1", vacation.start, vacation.end)]


@pytest.mark.parametrize("n_days", [1, 6, 7, 8, 14, 15, 17, 58])
def test_weeks_cover_range_without_gaps(n_days):
    start = date(2025, 7, 6)
    vacation = VacationRange(label="Été", start=start, end=start + timedelta(days=n_days - 1))

    subs = split_vacation_range(vacation, True)

    assert len(subs) == -(-n_days // 7)
    assert subs[0].start == vacation.start
    assert subs[-1].end == vacation.end
    assert sum(s.days for s in subs) == n_days
    for prev, nxt in zip(subs, subs[1:]):
        assert nxt.start == prev.end + timedelta(days=1)
    assert all(1 <= s.days <= 7 for s in subs)


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationError):
        split_vacation_range(VacationRange(label="X", start=date(2025, 1, 2), end=date(2025, 1, 1)), True)

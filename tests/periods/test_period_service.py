from __future__ import annotations

from datetime import date

import pytest

from src.leisure_timesheet.leisure_timesheet.core.enums import PeriodType, Role
from src.leisure_timesheet.leisure_timesheet.core.exceptions import AuthorizationError, ValidationError
from src.leisure_timesheet.leisure_timesheet.periods.model import Period, VacationRange
from src.leisure_timesheet.leisure_timesheet.periods.service import PeriodService


class FakePeriodsRepo:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, Period] = {}
        self.batches: list[list] = []

    def create(self, *, center_id, name, period_type, start_date, end_date, school_year_id=None, animator_ids=()):
        pid = self._next_id
        self._next_id += 1
        self.items[pid] = Period(
            period_id=pid,
            center_id=center_id,
            name=name,
            period_type=period_type,
            start_date=start_date,
            end_date=end_date,
            school_year_id=school_year_id,
            animator_ids=tuple(animator_ids),
        )
        return pid

    def create_many(self, *, center_id, period_type, ranges, school_year_id=None, animator_ids=()):
        self.batches.append(list(ranges))
        return [
            self.create(
                center_id=center_id,
                name=name,
                period_type=period_type,
                start_date=start,
                end_date=end,
                school_year_id=school_year_id,
                animator_ids=animator_ids,
            )
            for name, start, end in ranges
        ]

    def delete(self, *, period_id):
        return self.items.pop(int(period_id), None) is not None

    def list_for_center(self, *, center_id, school_year_id=None):
        return [
            p
            for p in self.items.values()
            if p.center_id == center_id and (school_year_id is None or p.school_year_id == school_year_id)
        ]


TOUSSAINT = VacationRange(label="Toussaint", start=date(2024, 10, 19), end=date(2024, 11, 4))


def test_director_creates_one_period_per_week():
    repo = FakePeriodsRepo()
    svc = PeriodService(repo)

    ids = svc.create_from_vacation(
        current_role=Role.DIRECTOR,
        center_id="center-1",
        school_year_id="2024-2025",
        vacation=TOUSSAINT,
        split_into_weeks=True,
        animator_ids=["a", "b"],
    )

    assert ids == [1, 2, 3]
    assert len(repo.batches) == 1
    assert [p.name for p in repo.items.values()] == [
        "Toussaint - Week 1",
        "Toussaint - Week 2",
        "Toussaint - Week 3",
    ]
    assert all(p.period_type == PeriodType.VACATION for p in repo.items.values())
    assert repo.items[3].animator_ids == ("a", "b")


def test_unsplit_vacation_creates_single_period():
    repo = FakePeriodsRepo()
    svc = PeriodService(repo)

    svc.create_from_vacation(
        current_role=Role.DIRECTOR,
        center_id="center-1",
        school_year_id=None,
        vacation=TOUSSAINT,
        split_into_weeks=False,
    )

    (period,) = repo.items.values()
    assert (period.name, period.start_date, period.end_date) == ("Toussaint", TOUSSAINT.start, TOUSSAINT.end)


def test_non_director_cannot_create_periods():
    svc = PeriodService(FakePeriodsRepo())

    with pytest.raises(AuthorizationError):
        svc.create_from_vacation(
            current_role=Role.ASSISTANT,
            center_id="center-1",
            school_year_id=None,
            vacation=TOUSSAINT,
            split_into_weeks=True,
        )


def test_create_period_validates_input():
    svc = PeriodService(FakePeriodsRepo())

    with pytest.raises(ValidationError):
        svc.create_period(
            current_role=Role.DIRECTOR,
            center_id="center-1",
            name="Mercredis",
            period_type=PeriodType.WEDNESDAY,
            start_date=date(2024, 9, 30),
            end_date=date(2024, 9, 1),
        )

    with pytest.raises(ValidationError):
        svc.create_period(
            current_role=Role.DIRECTOR,
            center_id="center-1",
            name="Mercredis",
            period_type="weekend",
            start_date=date(2024, 9, 1),
            end_date=date(2024, 9, 30),
        )


def test_delete_missing_period_fails():
    svc = PeriodService(FakePeriodsRepo())

    with pytest.raises(ValidationError):
        svc.delete_period(current_role=Role.DIRECTOR, period_id=42)


def test_list_periods_ui():
    repo = FakePeriodsRepo()
    svc = PeriodService(repo)
    svc.create_period(
        current_role=Role.DIRECTOR,
        center_id="center-1",
        name="Mercredis",
        period_type="wednesday",
        start_date=date(2024, 9, 4),
        end_date=date(2024, 12, 18),
        school_year_id="2024-2025",
    )

    rows = svc.list_periods(center_id="center-1")

    assert rows == [
        {
            "period_id": 1,
            "name": "Mercredis",
            "type": "wednesday",
            "start_date": "2024-09-04",
            "end_date": "2024-12-18",
            "school_year_id": "2024-2025",
            "animator_ids": [],
        }
    ]

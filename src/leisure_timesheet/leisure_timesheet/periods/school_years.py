from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_SCHOOL_YEARS_AHEAD
from .model import SchoolYear, VacationRange

# (label, start month/day, end month/day, start in following calendar year, end in following calendar year)
_VACATIONS = (
    ("Toussaint", (10, 19), (11, 4), False, False),
    ("Noël", (12, 21), (1, 6), False, True),
    ("Hiver", (2, 10), (2, 26), True, True),
    ("Printemps", (4, 13), (4, 29), True, True),
    ("Été", (7, 6), (9, 2), True, True),
)


def vacation_periods(year: int) -> tuple[VacationRange, ...]:
    """School vacations of the school year starting in September of ``year``."""
    out = []
    for label, (sm, sd), (em, ed), start_next, end_next in _VACATIONS:
        out.append(
            VacationRange(
                label=label,
                start=date(year + int(start_next), sm, sd),
                end=date(year + int(end_next), em, ed),
            )
        )
    return tuple(out)


def generate_school_years(first_year: int, count: int = DEFAULT_SCHOOL_YEARS_AHEAD) -> list[SchoolYear]:
    return [
        SchoolYear(
            name=f"{year}-{year + 1}",
            start_date=date(year, 9, 1),
            end_date=date(year + 1, 7, 31),
            vacations=vacation_periods(year),
        )
        for year in range(first_year, first_year + count)
    ]


def is_vacation_date(day: date, vacations: Iterable[VacationRange]) -> bool:
    return any(v.start <= day <= v.end for v in vacations)


def current_school_year(years: Sequence[SchoolYear], today: date) -> Optional[SchoolYear]:
    for year in years:
        if year.start_date <= today <= year.end_date:
            return year
    return None


def find_vacation(year: SchoolYear, label: str) -> Optional[VacationRange]:
    for vacation in year.vacations:
        if vacation.label == label:
            return vacation
    return None

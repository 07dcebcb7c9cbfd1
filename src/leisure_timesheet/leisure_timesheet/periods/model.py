from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import PeriodType


@dataclass(frozen=True)
class VacationRange:
    """A named, inclusive date range (a school vacation)."""

    label: str
    start: date
    end: date


@dataclass(frozen=True)
class SplitSubRange:
    label: str
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class SchoolYear:
    name: str
    start_date: date
    end_date: date
    vacations: tuple[VacationRange, ...] = ()


@dataclass(frozen=True)
class Period:
    """A block of activity days run by a center."""

    period_id: int
    center_id: str
    name: str
    period_type: PeriodType
    start_date: date
    end_date: date
    school_year_id: Optional[str] = None
    animator_ids: tuple[str, ...] = field(default_factory=tuple)

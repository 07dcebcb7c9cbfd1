from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import ClockState, TimeEventKind


@dataclass(frozen=True)
class TimeEvent:
    """One clock action. Immutable once recorded.

    ``kind`` may hold a raw string when the stored value is not a known kind;
    such events are carried through and ignored by the aggregator.
    """

    subject_id: str
    kind: Union[TimeEventKind, str]
    occurred_at: datetime
    center_id: Optional[str] = None
    event_id: Optional[int] = None


@dataclass(frozen=True)
class DaySchedule:
    """Planned effort for a subject on a date."""

    subject_id: str
    date: date
    planned_minutes: int
    center_id: Optional[str] = None
    schedule_id: Optional[int] = None


@dataclass(frozen=True)
class DailyAggregate:
    date: date
    subject_id: str
    worked_minutes: int
    is_open_ended: bool


@dataclass(frozen=True)
class PeriodRollup:
    range_start: date
    range_end: date
    planned_minutes: int
    actual_minutes: int
    difference_minutes: int


@dataclass(frozen=True)
class DayBalance:
    """Planned vs. actual for a single calendar day."""

    date: date
    planned_minutes: int
    actual_minutes: int

    @property
    def difference_minutes(self) -> int:
        return self.actual_minutes - self.planned_minutes


@dataclass(frozen=True)
class ClockStatus:
    state: ClockState
    last_event: Optional[TimeEvent]
    first_arrival_at: Optional[datetime]
    allowed_kinds: tuple[TimeEventKind, ...]

    @property
    def is_present(self) -> bool:
        return self.state != ClockState.IDLE

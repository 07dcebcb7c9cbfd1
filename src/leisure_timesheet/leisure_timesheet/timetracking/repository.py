from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimeEventKind
from .model import DaySchedule, TimeEvent


class TimeEventRepository(Protocol):
    def list_for_subject(self, *, subject_id: str, start: date, end: date) -> Sequence[TimeEvent]:
        """Events whose recorded work date falls in [start, end]."""

        raise NotImplementedError

    def list_for_subjects_on(self, *, subject_ids: Sequence[str], day: date) -> Sequence[TimeEvent]:
        raise NotImplementedError

    def create(
        self,
        *,
        subject_id: str,
        kind: TimeEventKind,
        occurred_at: datetime,
        work_date: date,
        center_id: Optional[str] = None,
    ) -> int:
        raise NotImplementedError


class WorkScheduleRepository(Protocol):
    def list_for_subject(self, *, subject_id: str, start: date, end: date) -> Sequence[DaySchedule]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        subject_id: str,
        work_date: date,
        planned_minutes: int,
        center_id: Optional[str] = None,
    ) -> int:
        """Create or update the planned minutes for a subject and date.

        Returns schedule_id.
        """

        raise NotImplementedError

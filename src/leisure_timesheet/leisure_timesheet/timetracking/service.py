from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import local_date, month_bounds, now_local, today_local, week_bounds
from ..core.enums import ClockState, Role, TimeEventKind
from ..core.exceptions import AuthorizationError, ValidationError
from .aggregator import aggregate_day, aggregate_range, clock_status
from .formatting import format_minutes, planned_minutes_from
from .model import PeriodRollup, TimeEvent
from .repository import TimeEventRepository, WorkScheduleRepository
from .rollup import daily_balances, rollup_period

logger = logging.getLogger(__name__)

_REJECTION_MESSAGES = {
    ClockState.IDLE: "You are not clocked in",
    ClockState.WORKING: "You are already clocked in",
    ClockState.ON_BREAK: "End your break first",
}


class TimeTrackingService:
    def __init__(
        self,
        events: TimeEventRepository,
        schedules: WorkScheduleRepository,
        *,
        tz_name: Optional[str] = None,
    ):
        self._events = events
        self._schedules = schedules
        self._tz = tz_name

    def record_event(
        self,
        subject_id: str,
        kind,
        *,
        center_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Record a clock action if it is legal from the subject's current state."""
        event_kind = TimeEventKind.parse(kind)
        if event_kind is None:
            raise ValidationError(f"Unknown clock action: {kind}")

        now = now or now_local(self._tz)
        today = local_date(now, self._tz)

        status = clock_status(self._events.list_for_subject(subject_id=subject_id, start=today, end=today))
        if event_kind not in status.allowed_kinds:
            logger.info("Rejected %s for subject %s while %s", event_kind.value, subject_id, status.state.value)
            if event_kind == TimeEventKind.BREAK_START and status.state == ClockState.ON_BREAK:
                raise ValidationError("You are already on a break")
            raise ValidationError(_REJECTION_MESSAGES[status.state])

        return self._events.create(
            subject_id=subject_id,
            kind=event_kind,
            occurred_at=now,
            work_date=today,
            center_id=center_id,
        )

    def current_status(self, subject_id: str, *, today: Optional[date] = None) -> dict:
        today = today or today_local(self._tz)
        status = clock_status(self._events.list_for_subject(subject_id=subject_id, start=today, end=today))
        return {
            "state": status.state.value,
            "allowed_actions": [k.value for k in status.allowed_kinds],
            "arrived_at": status.first_arrival_at.strftime("%H:%M") if status.first_arrival_at else None,
        }

    def daily_summary(self, subject_id: str, day: date) -> dict:
        events = self._events.list_for_subject(subject_id=subject_id, start=day, end=day)
        aggregate = aggregate_day(events, subject_id=subject_id, day=day, tz=self._tz)
        return {
            "date": day.strftime("%Y-%m-%d"),
            "worked_minutes": aggregate.worked_minutes,
            "worked": format_minutes(aggregate.worked_minutes),
            "is_open_ended": aggregate.is_open_ended,
            "entries": [self._entry_ui(e) for e in sorted(events, key=lambda e: e.occurred_at)],
        }

    def work_summary(self, subject_id: str, on: date) -> dict:
        """Worked time for the (Monday-based) week and the month containing ``on``."""
        week_start, week_end = week_bounds(on)
        month_start, month_end = month_bounds(on.year, on.month)
        return {
            "week": self._worked_ui(subject_id, week_start, week_end),
            "month": self._worked_ui(subject_id, month_start, month_end),
        }

    def monthly_schedule(self, subject_id: str, year: int, month: int) -> dict:
        start, end = month_bounds(year, month)
        events = self._events.list_for_subject(subject_id=subject_id, start=start, end=end)
        schedules = self._schedules.list_for_subject(subject_id=subject_id, start=start, end=end)
        aggregates = aggregate_range(events, start, end, subject_id=subject_id, tz=self._tz)

        days = [
            {
                "date": b.date.strftime("%Y-%m-%d"),
                "planned_minutes": b.planned_minutes,
                "actual_minutes": b.actual_minutes,
                "planned": format_minutes(b.planned_minutes),
                "actual": format_minutes(b.actual_minutes),
                "difference": format_minutes(b.difference_minutes),
            }
            for b in daily_balances(aggregates, schedules, start, end)
        ]
        return {
            "summary": self._rollup_ui(rollup_period(aggregates, schedules, start, end)),
            "days": days,
        }

    def set_planned_minutes(
        self,
        *,
        current_role: Role,
        current_user_id: str,
        subject_id: str,
        work_date: date,
        hours,
        minutes,
        center_id: Optional[str] = None,
    ) -> int:
        if current_role == Role.ANIMATOR and str(current_user_id) != str(subject_id):
            raise AuthorizationError("You can only plan your own schedule")

        planned = planned_minutes_from(hours, minutes)
        return self._schedules.upsert(
            subject_id=subject_id,
            work_date=work_date,
            planned_minutes=planned,
            center_id=center_id,
        )

    def presence(self, subject_ids: Sequence[str], day: date) -> dict:
        by_subject: dict[str, list[TimeEvent]] = defaultdict(list)
        for event in self._events.list_for_subjects_on(subject_ids=subject_ids, day=day):
            by_subject[event.subject_id].append(event)

        rows = []
        for subject_id in subject_ids:
            status = clock_status(by_subject.get(subject_id, []))
            rows.append(
                {
                    "subject_id": subject_id,
                    "present": status.is_present,
                    "state": status.state.value,
                    "arrived_at": status.first_arrival_at.strftime("%H:%M")
                    if status.is_present and status.first_arrival_at
                    else None,
                }
            )

        return {"present_count": sum(1 for r in rows if r["present"]), "subjects": rows}

    def _worked_ui(self, subject_id: str, start: date, end: date) -> dict:
        events = self._events.list_for_subject(subject_id=subject_id, start=start, end=end)
        minutes = sum(a.worked_minutes for a in aggregate_range(events, start, end, subject_id=subject_id, tz=self._tz))
        return {
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "worked_minutes": minutes,
            "worked": format_minutes(minutes),
        }

    def _rollup_ui(self, r: PeriodRollup) -> dict:
        return {
            "start": r.range_start.strftime("%Y-%m-%d"),
            "end": r.range_end.strftime("%Y-%m-%d"),
            "planned_minutes": r.planned_minutes,
            "actual_minutes": r.actual_minutes,
            "difference_minutes": r.difference_minutes,
            "planned": format_minutes(r.planned_minutes),
            "actual": format_minutes(r.actual_minutes),
            "difference": format_minutes(r.difference_minutes),
        }

    def _entry_ui(self, e: TimeEvent) -> dict:
        kind = TimeEventKind.parse(e.kind)
        label = {
            TimeEventKind.ARRIVAL: "Started work",
            TimeEventKind.BREAK_START: "Started break",
            TimeEventKind.BREAK_END: "Ended break",
            TimeEventKind.DEPARTURE: "Ended work",
        }.get(kind, "")
        return {
            "type": kind.value if kind else str(e.kind),
            "label": label,
            "time": e.occurred_at.strftime("%H:%M:%S"),
        }

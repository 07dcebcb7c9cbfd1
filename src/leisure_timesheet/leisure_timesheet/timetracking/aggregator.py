"""Worked-time aggregation over clock events.

A subject's day is replayed through a small state machine::

    Idle --arrival--> Working --break_start--> OnBreak --break_end--> Working
    Working --departure--> Idle

Any other (state, event) pair, including unknown kinds, leaves the tally
untouched. Only closed intervals count towards ``worked_minutes``; a day that
ends while Working or OnBreak is reported as open-ended.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date, datetime
from functools import reduce
from typing import Iterable, Optional

from ..common.datetime_utils import local_date, whole_minutes_between
from ..core.enums import ClockState, TimeEventKind
from ..core.exceptions import ValidationError
from .model import ClockStatus, DailyAggregate, TimeEvent
from .normalizer import normalize_events

logger = logging.getLogger(__name__)

_TRANSITIONS: dict[tuple[ClockState, TimeEventKind], ClockState] = {
    (ClockState.IDLE, TimeEventKind.ARRIVAL): ClockState.WORKING,
    (ClockState.WORKING, TimeEventKind.BREAK_START): ClockState.ON_BREAK,
    (ClockState.ON_BREAK, TimeEventKind.BREAK_END): ClockState.WORKING,
    (ClockState.WORKING, TimeEventKind.DEPARTURE): ClockState.IDLE,
}

ALLOWED_KINDS: dict[ClockState, tuple[TimeEventKind, ...]] = {
    ClockState.IDLE: (TimeEventKind.ARRIVAL,),
    ClockState.WORKING: (TimeEventKind.BREAK_START, TimeEventKind.DEPARTURE),
    ClockState.ON_BREAK: (TimeEventKind.BREAK_END,),
}


@dataclass(frozen=True)
class ClockTally:
    """Reducer state after replaying a prefix of a day's events."""

    state: ClockState = ClockState.IDLE
    current_start: Optional[datetime] = None
    worked_minutes: int = 0
    first_arrival_at: Optional[datetime] = None
    last_event: Optional[TimeEvent] = None

    @property
    def is_open_ended(self) -> bool:
        return self.state != ClockState.IDLE


def step(tally: ClockTally, event: TimeEvent) -> ClockTally:
    """Apply one event to the tally and return the new tally."""
    kind = TimeEventKind.parse(event.kind)
    next_state = _TRANSITIONS.get((tally.state, kind)) if kind else None
    if next_state is None:
        logger.debug(
            "Ignoring %s at %s for subject %s while %s",
            event.kind,
            event.occurred_at,
            event.subject_id,
            tally.state.value,
        )
        return tally

    if next_state == ClockState.WORKING:
        first_arrival = tally.first_arrival_at
        if kind == TimeEventKind.ARRIVAL and first_arrival is None:
            first_arrival = event.occurred_at
        return replace(
            tally,
            state=next_state,
            current_start=event.occurred_at,
            first_arrival_at=first_arrival,
            last_event=event,
        )

    # Leaving Working: close the open interval.
    minutes = whole_minutes_between(tally.current_start, event.occurred_at)
    return replace(
        tally,
        state=next_state,
        current_start=None,
        worked_minutes=tally.worked_minutes + minutes,
        last_event=event,
    )


def replay(events: Iterable[TimeEvent]) -> ClockTally:
    return reduce(step, normalize_events(events), ClockTally())


def aggregate_day(
    events: Iterable[TimeEvent],
    *,
    subject_id: Optional[str] = None,
    day: Optional[date] = None,
    tz: Optional[str] = None,
) -> DailyAggregate:
    """Worked minutes for one subject's events on a single calendar day.

    ``subject_id`` and ``day`` default to those of the earliest event and must
    be given when ``events`` is empty.
    """
    ordered = normalize_events(events)
    if ordered:
        subject_id = subject_id if subject_id is not None else ordered[0].subject_id
        day = day or local_date(ordered[0].occurred_at, tz)
    if subject_id is None or day is None:
        raise ValidationError("subject_id and day are required for an empty event list")

    tally = reduce(step, ordered, ClockTally())
    return DailyAggregate(
        date=day,
        subject_id=subject_id,
        worked_minutes=tally.worked_minutes,
        is_open_ended=tally.is_open_ended,
    )


def aggregate_range(
    events: Iterable[TimeEvent],
    start: date,
    end: date,
    *,
    subject_id: str,
    tz: Optional[str] = None,
) -> list[DailyAggregate]:
    """One aggregate per local calendar day in [start, end] on which
    ``subject_id`` has events. Events of other subjects are skipped.

    Days are replayed independently: an interval still open at midnight is not
    carried into the next day.
    """
    by_day: dict[date, list[TimeEvent]] = defaultdict(list)
    for event in events:
        if event.subject_id != subject_id:
            continue
        day = local_date(event.occurred_at, tz)
        if start <= day <= end:
            by_day[day].append(event)

    return [aggregate_day(by_day[day], subject_id=subject_id, day=day, tz=tz) for day in sorted(by_day)]


def clock_status(events: Iterable[TimeEvent]) -> ClockStatus:
    """Where a subject currently stands and which clock actions are accepted next."""
    tally = replay(events)
    return ClockStatus(
        state=tally.state,
        last_event=tally.last_event,
        first_arrival_at=tally.first_arrival_at,
        allowed_kinds=ALLOWED_KINDS[tally.state],
    )

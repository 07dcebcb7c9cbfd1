from __future__ import annotations

from datetime import datetime

import pytest

from src.leisure_timesheet.leisure_timesheet.timetracking.model import TimeEvent


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 10, 21, 9, 0, 0)


@pytest.fixture
def make_event():
    """Build a TimeEvent for subject 'anim-1' on 2024-10-21 from 'HH:MM'."""

    def _make(kind, hhmm: str, *, subject_id: str = "anim-1", day: str = "2024-10-21") -> TimeEvent:
        return TimeEvent(
            subject_id=subject_id,
            kind=kind,
            occurred_at=datetime.strptime(f"{day} {hhmm}", "%Y-%m-%d %H:%M"),
        )

    return _make

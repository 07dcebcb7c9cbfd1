from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Role flags resolved upstream and carried in the session."""

    DIRECTOR = "director"
    ASSISTANT = "assistant"
    ANIMATOR = "animator"


class TimeEventKind(str, Enum):
    """Clock actions an animator can record."""

    ARRIVAL = "arrival"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    DEPARTURE = "departure"

    @classmethod
    def parse(cls, value) -> Optional["TimeEventKind"]:
        """Return the matching kind, or None for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ClockState(str, Enum):
    IDLE = "idle"
    WORKING = "working"
    ON_BREAK = "on_break"


class PeriodType(str, Enum):
    WEDNESDAY = "wednesday"
    VACATION = "vacation"

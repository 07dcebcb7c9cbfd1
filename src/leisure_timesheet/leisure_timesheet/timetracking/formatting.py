from __future__ import annotations

from ..common.validators import require_non_negative_int
from ..core.constants import MINUTES_PER_HOUR
from ..core.exceptions import ValidationError


def format_minutes(minutes: int) -> str:
    """Render minutes as ``{sign}{hours}h{minutes:02d}``, e.g. ``-1h05``."""
    minutes = int(minutes)
    sign = "-" if minutes < 0 else ""
    hours, mins = divmod(abs(minutes), MINUTES_PER_HOUR)
    return f"{sign}{hours}h{mins:02d}"


def planned_minutes_from(hours, minutes) -> int:
    hours = require_non_negative_int(hours, "Hours")
    minutes = require_non_negative_int(minutes, "Minutes")
    if minutes >= MINUTES_PER_HOUR:
        raise ValidationError("Minutes must be below 60")
    return hours * MINUTES_PER_HOUR + minutes

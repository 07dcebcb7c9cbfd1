from __future__ import annotations

import math
from datetime import timedelta

from ..common.validators import require_date_order
from ..core.constants import DAYS_PER_WEEK
from .model import SplitSubRange, VacationRange


def split_vacation_range(vacation: VacationRange, split_into_weeks: bool) -> list[SplitSubRange]:
    """Cut a vacation into consecutive 7-day blocks starting on its first day.

    Without splitting the range comes back as a single entry, label unchanged.
    Blocks are labelled ``"<label> - Week <n>"``; the last one ends on the
    vacation's own end date and may be shorter than a week.
    """
    require_date_order(vacation.start, vacation.end)

    if not split_into_weeks:
        return [SplitSubRange(label=vacation.label, start=vacation.start, end=vacation.end)]

    total_days = (vacation.end - vacation.start).days + 1
    weeks_count = math.ceil(total_days / DAYS_PER_WEEK)

    out: list[SplitSubRange] = []
    for i in range(weeks_count):
        week_start = vacation.start + timedelta(days=i * DAYS_PER_WEEK)
        week_end = min(week_start + timedelta(days=DAYS_PER_WEEK - 1), vacation.end)
        out.append(SplitSubRange(label=f"{vacation.label} - Week {i + 1}", start=week_start, end=week_end))
    return out

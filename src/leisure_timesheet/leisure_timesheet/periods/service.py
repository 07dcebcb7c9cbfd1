from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_date_order, require_non_empty
from ..core.enums import PeriodType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import SplitSubRange, VacationRange
from .repository import PeriodRepository
from .splitter import split_vacation_range

logger = logging.getLogger(__name__)


class PeriodService:
    def __init__(self, periods: PeriodRepository):
        self._periods = periods

    def preview_split(self, vacation: VacationRange, split_into_weeks: bool) -> list[SplitSubRange]:
        return split_vacation_range(vacation, split_into_weeks)

    def create_from_vacation(
        self,
        *,
        current_role: Role,
        center_id: str,
        school_year_id: Optional[str],
        vacation: VacationRange,
        split_into_weeks: bool,
        animator_ids: Sequence[str] = (),
    ) -> list[int]:
        """Create one vacation period, or one per week when splitting.

        The periods are written together: either every week is stored or none is.
        """
        self._require_director(current_role)
        center_id = require_non_empty(center_id, "Center")
        require_non_empty(vacation.label, "Name")

        ids = self._periods.create_many(
            center_id=center_id,
            period_type=PeriodType.VACATION,
            ranges=[(sub.label, sub.start, sub.end) for sub in split_vacation_range(vacation, split_into_weeks)],
            school_year_id=school_year_id,
            animator_ids=tuple(animator_ids),
        )

        logger.info("Created %d period(s) from vacation %s for center %s", len(ids), vacation.label, center_id)
        return ids

    def create_period(
        self,
        *,
        current_role: Role,
        center_id: str,
        name: str,
        period_type: PeriodType,
        start_date: date,
        end_date: date,
        school_year_id: Optional[str] = None,
        animator_ids: Sequence[str] = (),
    ) -> int:
        self._require_director(current_role)
        center_id = require_non_empty(center_id, "Center")
        name = require_non_empty(name, "Name")
        require_date_order(start_date, end_date)
        try:
            period_type = PeriodType(period_type)
        except ValueError:
            raise ValidationError(f"Unknown period type: {period_type}") from None

        return self._periods.create(
            center_id=center_id,
            name=name,
            period_type=period_type,
            start_date=start_date,
            end_date=end_date,
            school_year_id=school_year_id,
            animator_ids=tuple(animator_ids),
        )

    def delete_period(self, *, current_role: Role, period_id: int) -> None:
        self._require_director(current_role)

        if not self._periods.delete(period_id=int(period_id)):
            raise ValidationError("Period could not be deleted")

    def list_periods(self, *, center_id: str, school_year_id: Optional[str] = None) -> list[dict]:
        return [
            {
                "period_id": p.period_id,
                "name": p.name,
                "type": p.period_type.value,
                "start_date": p.start_date.strftime("%Y-%m-%d"),
                "end_date": p.end_date.strftime("%Y-%m-%d"),
                "school_year_id": p.school_year_id,
                "animator_ids": list(p.animator_ids),
            }
            for p in self._periods.list_for_center(center_id=center_id, school_year_id=school_year_id)
        ]

    @staticmethod
    def _require_director(current_role: Role) -> None:
        if current_role != Role.DIRECTOR:
            raise AuthorizationError("Only directors can manage periods")

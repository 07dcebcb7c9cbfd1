from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PeriodType
from .model import Period


class PeriodRepository(Protocol):
    def create(
        self,
        *,
        center_id: str,
        name: str,
        period_type: PeriodType,
        start_date: date,
        end_date: date,
        school_year_id: Optional[str] = None,
        animator_ids: Sequence[str] = (),
    ) -> int:
        raise NotImplementedError

    def create_many(
        self,
        *,
        center_id: str,
        period_type: PeriodType,
        ranges: Sequence[tuple[str, date, date]],
        school_year_id: Optional[str] = None,
        animator_ids: Sequence[str] = (),
    ) -> list[int]:
        """Insert one period per (name, start_date, end_date); all or nothing."""
        raise NotImplementedError

    def delete(self, *, period_id: int) -> bool:
        raise NotImplementedError

    def list_for_center(self, *, center_id: str, school_year_id: Optional[str] = None) -> Sequence[Period]:
        raise NotImplementedError

from __future__ import annotations

from typing import Iterable

from .model import TimeEvent


def normalize_events(events: Iterable[TimeEvent]) -> list[TimeEvent]:
    """Return events in ascending ``occurred_at`` order.

    ``sorted`` is stable, so events sharing a timestamp keep their relative
    input order. Nothing is validated, dropped or copied.
    """
    return sorted(events, key=lambda e: e.occurred_at)

from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must not be before start date")

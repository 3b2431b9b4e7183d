from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_negative_int(value: object, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_month(year: object, month: object) -> tuple[int, int]:
    try:
        y, m = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("year/month must be numbers")
    if not 1 <= m <= 12:
        raise ValidationError("month must be between 1 and 12")
    return y, m


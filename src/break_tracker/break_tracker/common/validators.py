from __future__ import annotations

from typing import Optional

from ..core.enums import BreakKey
from ..core.exceptions import ValidationError
from .datetime_utils import parse_time_of_day


def require_time_of_day(value: Optional[str], field_name: str, *, required: bool = True) -> Optional[str]:
    """Validate an ``HH:MM`` value and return it normalized (zero-padded)."""
    if value is None or not str(value).strip():
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    parsed = parse_time_of_day(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be a HH:MM time")
    return parsed.strftime("%H:%M")


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_break_key(value) -> BreakKey:
    try:
        return BreakKey(value)
    except ValueError:
        raise ValidationError(f"Unknown break: {value!r}") from None

from __future__ import annotations

from typing import Any, Optional

from ..core.enums import Weekday
from ..core.exceptions import RangeViolationError, ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid") from None
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def require_reference(value: Any, field_name: str) -> str:
    """Ids of referenced-only records (class, teacher, ...) are opaque strings."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_day_of_week(value: Any, field_name: str = "day_of_week") -> int:
    """0 = Sunday ... 6 = Saturday."""
    try:
        return int(Weekday(int(value)))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be 0-6, got {value!r}") from None


def optional_day_of_week(value: Any, field_name: str = "day_of_week") -> Optional[int]:
    if value is None or value == "":
        return None
    return require_day_of_week(value, field_name)


def require_ordered(start: str, end: str, what: str) -> None:
    if start > end:
        raise RangeViolationError(f"{what}: start {start} is after end {end}")


def optional_text(value: Optional[str]) -> Optional[str]:
    value = value.strip() if value else None
    return value or None

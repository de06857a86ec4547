from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import HMS_TIME_FORMAT, ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def require_iso_date(value: Optional[str], field_name: str) -> str:
    """Validate a calendar date string and return it unchanged.

    Dates are compared lexicographically across the code base, so only the
    zero-padded ``YYYY-MM-DD`` form is accepted.
    """

    if not value or not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}") from None
    if parsed.strftime(ISO_DATE_FORMAT) != value:
        raise ValidationError(f"{field_name} must be a zero-padded YYYY-MM-DD date, got {value!r}")
    return value


def require_hms_time(value: Optional[str], field_name: str) -> str:
    """Normalize a time of day to zero-padded ``HH:MM:SS``.

    Accepts ``H:MM`` / ``HH:MM`` / ``HH:MM:SS``; the fixed-width output is
    what makes string comparison equal chronological order.
    """

    if value is None:
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, time):
        return value.strftime(HMS_TIME_FORMAT)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValidationError(f"{field_name} must be an HH:MM:SS time, got {value!r}")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) == 3 and parts[2] else 0
        parsed = time(hour=hours, minute=minutes, second=seconds)
    except ValueError:
        raise ValidationError(f"{field_name} must be an HH:MM:SS time, got {value!r}") from None
    return parsed.strftime(HMS_TIME_FORMAT)


def weekday_of(value: str) -> int:
    """Day of week for an ISO date, 0 = Sunday ... 6 = Saturday."""
    return (parse_iso_date(value).weekday() + 1) % 7


def ranges_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Boundary-inclusive overlap test for two ``[start, end]`` date ranges.

    A shared start date or a shared end date counts as an overlap, and so
    does one range strictly containing the other. Two ranges that only
    touch (one ends on the day the other starts) do not overlap.
    """

    return (
        (b_start < a_start < b_end)
        or (b_start < a_end < b_end)
        or (a_start < b_start and a_end > b_end)
        or a_start == b_start
        or a_end == b_end
    )


def date_in_range(value: str, start: str, end: str) -> bool:
    return start <= value <= end

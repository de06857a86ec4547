from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolCalendar:
    """Date envelope for one school year. Dates are ``YYYY-MM-DD`` strings."""

    id: int
    name: str
    start_date: str
    end_date: str
    is_active: bool = False
    description: Optional[str] = None

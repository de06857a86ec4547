from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import TermType


@dataclass(frozen=True)
class CalendarTerm:
    """Named sub-range of a school calendar, instructional or break."""

    id: int
    calendar_id: int
    name: str
    start_date: str
    end_date: str
    is_break: bool = False
    term_type: TermType = TermType.TERM
    is_current: bool = False
    description: Optional[str] = None

    def contains(self, day: str) -> bool:
        return self.start_date <= day <= self.end_date

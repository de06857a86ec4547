from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TermType
from .model import CalendarTerm


class TermRepository(Protocol):
    def list_for_calendar(self, calendar_id: int) -> Sequence[CalendarTerm]:
        """Terms of one calendar ordered by start_date."""

        raise NotImplementedError

    def get_by_id(self, term_id: int) -> Optional[CalendarTerm]:
        raise NotImplementedError

    def count_for_calendar(self, calendar_id: int) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        calendar_id: int,
        name: str,
        start_date: str,
        end_date: str,
        is_break: bool,
        term_type: TermType,
        is_current: bool = False,
        description: Optional[str] = None,
    ) -> int:
        """Insert a term. Returns the new id.

        With ``is_current`` the other terms of the calendar lose the flag.
        """

        raise NotImplementedError

    def update(
        self,
        *,
        term_id: int,
        name: str,
        start_date: str,
        end_date: str,
        is_break: bool,
        term_type: TermType,
        is_current: bool = False,
        description: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def delete(self, *, term_id: int) -> bool:
        raise NotImplementedError

    def set_current(self, *, calendar_id: int, term_id: int) -> None:
        """Clear ``is_current`` on the calendar's other terms, then set it on ``term_id``."""

        raise NotImplementedError

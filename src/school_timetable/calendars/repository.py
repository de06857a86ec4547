from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolCalendar


class CalendarRepository(Protocol):
    def list_all(self) -> Sequence[SchoolCalendar]:
        """All calendars ordered by start_date."""

        raise NotImplementedError

    def get_by_id(self, calendar_id: int) -> Optional[SchoolCalendar]:
        raise NotImplementedError

    def get_active(self) -> Optional[SchoolCalendar]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
        is_active: bool = False,
    ) -> int:
        """Insert a calendar. Returns the new id."""

        raise NotImplementedError

    def update(
        self,
        *,
        calendar_id: int,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def delete(self, *, calendar_id: int) -> bool:
        raise NotImplementedError

    def activate(self, *, calendar_id: int) -> None:
        """Clear ``is_active`` on every calendar, then set it on the target.

        Implementations backed by a transactional store must apply both writes
        atomically.
        """

        raise NotImplementedError

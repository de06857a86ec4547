from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_for_calendar(self, calendar_id: int) -> Sequence[Holiday]:
        """Holidays of one calendar ordered by date."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def create(self, *, calendar_id: int, name: str, date: str, recurring: bool = False) -> int:
        raise NotImplementedError

    def update(self, *, holiday_id: int, name: str, date: str, recurring: bool = False) -> None:
        raise NotImplementedError

    def delete(self, *, holiday_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Timeslot


class TimeslotRepository(Protocol):
    def list_all(self) -> Sequence[Timeslot]:
        """All timeslots ordered by start_time."""

        raise NotImplementedError

    def get_by_id(self, timeslot_id: int) -> Optional[Timeslot]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: Optional[int] = None,
        is_break: bool = False,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        timeslot_id: int,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: Optional[int] = None,
        is_break: bool = False,
    ) -> None:
        raise NotImplementedError

    def delete(self, *, timeslot_id: int) -> bool:
        raise NotImplementedError

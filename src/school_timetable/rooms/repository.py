from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Room


class RoomRepository(Protocol):
    def list_all(self) -> Sequence[Room]:
        """All rooms ordered by name."""

        raise NotImplementedError

    def get_by_id(self, room_id: int) -> Optional[Room]:
        raise NotImplementedError

    def create(self, *, name: str, capacity: Optional[int] = None, description: Optional[str] = None) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        room_id: int,
        name: str,
        capacity: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def delete(self, *, room_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_positive_id
from ..core.exceptions import NotFoundError, ReferentialBlockError, ValidationError
from ..timetable.repository import TimetableRepository
from .model import Room
from .repository import RoomRepository

logger = logging.getLogger(__name__)


def _optional_capacity(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        capacity = int(value)
    except (TypeError, ValueError):
        raise ValidationError("capacity must be a whole number") from None
    if capacity < 0:
        raise ValidationError("capacity must not be negative")
    return capacity


class RoomService:
    def __init__(self, rooms: RoomRepository, entries: TimetableRepository):
        self._rooms = rooms
        self._entries = entries

    def list_rooms(self) -> Sequence[Room]:
        return self._rooms.list_all()

    def get(self, room_id: int) -> Room:
        room = self._rooms.get_by_id(require_positive_id(room_id, "room_id"))
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")
        return room

    def create(self, *, name: str, capacity: Any = None, description: Optional[str] = None) -> Room:
        name = require_non_empty(name, "name")
        room_id = self._rooms.create(
            name=name, capacity=_optional_capacity(capacity), description=optional_text(description)
        )
        logger.debug("Created room: %s (id=%s)", name, room_id)
        return self.get(room_id)

    def update(self, room_id: int, *, name: str, capacity: Any = None, description: Optional[str] = None) -> Room:
        existing = self.get(room_id)
        name = require_non_empty(name, "name")
        self._rooms.update(
            room_id=existing.id,
            name=name,
            capacity=_optional_capacity(capacity),
            description=optional_text(description),
        )
        return self.get(existing.id)

    def delete(self, room_id: int) -> None:
        room = self.get(room_id)
        in_use = self._entries.count_for_room(room.id)
        if in_use:
            logger.info("Refused to delete room %s: used by %s entries", room.id, in_use)
            raise ReferentialBlockError(f"Room '{room.name}' is used in {in_use} timetable entries")
        self._rooms.delete(room_id=room.id)
        logger.debug("Deleted room id=%s", room.id)

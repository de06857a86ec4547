from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Room
from .repository import RoomRepository


def _row_to_room(r: dict) -> Room:
    capacity = r.get("capacity")
    return Room(
        id=int(r["id"]),
        name=r["name"],
        capacity=int(capacity) if capacity is not None else None,
        description=r.get("description"),
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, capacity, description FROM rooms ORDER BY name ASC, id ASC")
            return [_row_to_room(r) for r in fetchall(cur)]

    def get_by_id(self, room_id: int) -> Optional[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, capacity, description FROM rooms WHERE id=%s", (int(room_id),))
            r = fetchone(cur)
            return _row_to_room(r) if r else None

    def create(self, *, name: str, capacity: Optional[int] = None, description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO rooms(name, capacity, description) VALUES(%s,%s,%s)",
                (name, capacity, description),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        room_id: int,
        name: str,
        capacity: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE rooms SET name=%s, capacity=%s, description=%s WHERE id=%s",
                (name, capacity, description, int(room_id)),
            )

    def delete(self, *, room_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM rooms WHERE id=%s", (int(room_id),))
            return cur.rowcount > 0

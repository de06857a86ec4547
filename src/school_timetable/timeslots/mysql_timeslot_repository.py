from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_text
from .model import Timeslot
from .repository import TimeslotRepository

_COLUMNS = "id, name, start_time, end_time, day_of_week, is_break"


def _row_to_timeslot(r: dict) -> Timeslot:
    day = r.get("day_of_week")
    return Timeslot(
        id=int(r["id"]),
        name=r["name"],
        start_time=mysql_time_text(r["start_time"]),
        end_time=mysql_time_text(r["end_time"]),
        day_of_week=int(day) if day is not None else None,
        is_break=bool(r["is_break"]),
    )


class MySQLTimeslotRepository(TimeslotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Timeslot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timeslots ORDER BY start_time ASC, id ASC")
            return [_row_to_timeslot(r) for r in fetchall(cur)]

    def get_by_id(self, timeslot_id: int) -> Optional[Timeslot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timeslots WHERE id=%s", (int(timeslot_id),))
            r = fetchone(cur)
            return _row_to_timeslot(r) if r else None

    def create(
        self,
        *,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: Optional[int] = None,
        is_break: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timeslots(name, start_time, end_time, day_of_week, is_break)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, start_time, end_time, day_of_week, int(bool(is_break))),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timeslots
                SET name=%s, start_time=%s, end_time=%s, day_of_week=%s, is_break=%s
                WHERE id=%s
                """,
                (name, start_time, end_time, day_of_week, int(bool(is_break)), int(timeslot_id)),
            )

    def delete(self, *, timeslot_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timeslots WHERE id=%s", (int(timeslot_id),))
            return cur.rowcount > 0

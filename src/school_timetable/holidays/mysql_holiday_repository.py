from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_date_text
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "id, calendar_id, name, date, recurring"


def _row_to_holiday(r: dict) -> Holiday:
    return Holiday(
        id=int(r["id"]),
        calendar_id=int(r["calendar_id"]),
        name=r["name"],
        date=mysql_date_text(r["date"]),
        recurring=bool(r["recurring"]),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_calendar(self, calendar_id: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE calendar_id=%s ORDER BY date ASC, id ASC",
                (int(calendar_id),),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays ORDER BY date ASC, id ASC")
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays WHERE id=%s", (int(holiday_id),))
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def create(self, *, calendar_id: int, name: str, date: str, recurring: bool = False) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays(calendar_id, name, date, recurring) VALUES(%s,%s,%s,%s)",
                (int(calendar_id), name, date, int(bool(recurring))),
            )
            return int(cur.lastrowid)

    def update(self, *, holiday_id: int, name: str, date: str, recurring: bool = False) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE holidays SET name=%s, date=%s, recurring=%s WHERE id=%s",
                (name, date, int(bool(recurring)), int(holiday_id)),
            )

    def delete(self, *, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE id=%s", (int(holiday_id),))
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_date_text
from .model import SchoolCalendar
from .repository import CalendarRepository

_COLUMNS = "id, name, description, start_date, end_date, is_active"


def _row_to_calendar(r: dict) -> SchoolCalendar:
    return SchoolCalendar(
        id=int(r["id"]),
        name=r["name"],
        description=r.get("description"),
        start_date=mysql_date_text(r["start_date"]),
        end_date=mysql_date_text(r["end_date"]),
        is_active=bool(r["is_active"]),
    )


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SchoolCalendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM school_calendar ORDER BY start_date ASC, id ASC")
            return [_row_to_calendar(r) for r in fetchall(cur)]

    def get_by_id(self, calendar_id: int) -> Optional[SchoolCalendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM school_calendar WHERE id=%s", (int(calendar_id),))
            r = fetchone(cur)
            return _row_to_calendar(r) if r else None

    def get_active(self) -> Optional[SchoolCalendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM school_calendar WHERE is_active=1 ORDER BY start_date ASC LIMIT 1"
            )
            r = fetchone(cur)
            return _row_to_calendar(r) if r else None

    def create(
        self,
        *,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
        is_active: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO school_calendar(name, description, start_date, end_date, is_active)
                VALUES(%s,%s,%s,%s,0)
                """,
                (name, description, start_date, end_date),
            )
            calendar_id = int(cur.lastrowid)
            if is_active:
                # Same transaction as the insert.
                cur.execute("UPDATE school_calendar SET is_active=0 WHERE id<>%s", (calendar_id,))
                cur.execute("UPDATE school_calendar SET is_active=1 WHERE id=%s", (calendar_id,))
            return calendar_id

    def update(
        self,
        *,
        calendar_id: int,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE school_calendar
                SET name=%s, description=%s, start_date=%s, end_date=%s
                WHERE id=%s
                """,
                (name, description, start_date, end_date, int(calendar_id)),
            )

    def delete(self, *, calendar_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM school_calendar WHERE id=%s", (int(calendar_id),))
            return cur.rowcount > 0

    def activate(self, *, calendar_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE school_calendar SET is_active=0 WHERE id<>%s", (int(calendar_id),))
            cur.execute("UPDATE school_calendar SET is_active=1 WHERE id=%s", (int(calendar_id),))

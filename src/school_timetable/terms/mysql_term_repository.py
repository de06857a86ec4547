from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TermType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_date_text
from .model import CalendarTerm
from .repository import TermRepository

_COLUMNS = "id, calendar_id, name, description, start_date, end_date, is_break, term_type, is_current"


def _row_to_term(r: dict) -> CalendarTerm:
    return CalendarTerm(
        id=int(r["id"]),
        calendar_id=int(r["calendar_id"]),
        name=r["name"],
        description=r.get("description"),
        start_date=mysql_date_text(r["start_date"]),
        end_date=mysql_date_text(r["end_date"]),
        is_break=bool(r["is_break"]),
        term_type=TermType(r.get("term_type") or TermType.TERM.value),
        is_current=bool(r["is_current"]),
    )


def _clear_current(cur, *, calendar_id: int, keep_term_id: int) -> None:
    cur.execute(
        "UPDATE calendar_terms SET is_current=0 WHERE calendar_id=%s AND id<>%s",
        (int(calendar_id), int(keep_term_id)),
    )


class MySQLTermRepository(TermRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_calendar(self, calendar_id: int) -> Sequence[CalendarTerm]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM calendar_terms
                WHERE calendar_id=%s
                ORDER BY start_date ASC, id ASC
                """,
                (int(calendar_id),),
            )
            return [_row_to_term(r) for r in fetchall(cur)]

    def get_by_id(self, term_id: int) -> Optional[CalendarTerm]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM calendar_terms WHERE id=%s", (int(term_id),))
            r = fetchone(cur)
            return _row_to_term(r) if r else None

    def count_for_calendar(self, calendar_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM calendar_terms WHERE calendar_id=%s", (int(calendar_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO calendar_terms
                    (calendar_id, name, description, start_date, end_date, is_break, term_type, is_current)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(calendar_id),
                    name,
                    description,
                    start_date,
                    end_date,
                    int(bool(is_break)),
                    TermType(term_type).value,
                    int(bool(is_current)),
                ),
            )
            term_id = int(cur.lastrowid)
            if is_current:
                _clear_current(cur, calendar_id=calendar_id, keep_term_id=term_id)
            return term_id

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
        with db_cursor(self._conn_factory) as (_, cur):
            if is_current:
                cur.execute("SELECT calendar_id FROM calendar_terms WHERE id=%s", (int(term_id),))
                r = fetchone(cur)
                if r:
                    _clear_current(cur, calendar_id=int(r["calendar_id"]), keep_term_id=term_id)
            cur.execute(
                """
                UPDATE calendar_terms
                SET name=%s, description=%s, start_date=%s, end_date=%s,
                    is_break=%s, term_type=%s, is_current=%s
                WHERE id=%s
                """,
                (
                    name,
                    description,
                    start_date,
                    end_date,
                    int(bool(is_break)),
                    TermType(term_type).value,
                    int(bool(is_current)),
                    int(term_id),
                ),
            )

    def delete(self, *, term_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM calendar_terms WHERE id=%s", (int(term_id),))
            return cur.rowcount > 0

    def set_current(self, *, calendar_id: int, term_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            _clear_current(cur, calendar_id=calendar_id, keep_term_id=term_id)
            cur.execute("UPDATE calendar_terms SET is_current=1 WHERE id=%s", (int(term_id),))

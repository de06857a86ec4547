from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, mysql_date_text
from .model import EntryDraft, TimetableEntry
from .repository import TimetableRepository

_COLUMNS = (
    "id, class_id, subject_id, teacher_id, timeslot_id, room_id, day_of_week, recurring, start_date, end_date"
)


def _row_to_entry(r: dict) -> TimetableEntry:
    room_id = r.get("room_id")
    return TimetableEntry(
        id=int(r["id"]),
        class_id=str(r["class_id"]),
        subject_id=int(r["subject_id"]),
        teacher_id=str(r["teacher_id"]),
        timeslot_id=int(r["timeslot_id"]),
        room_id=int(room_id) if room_id is not None else None,
        day_of_week=int(r["day_of_week"]),
        recurring=bool(r["recurring"]),
        start_date=mysql_date_text(r.get("start_date")),
        end_date=mysql_date_text(r.get("end_date")),
    )


def _draft_params(draft: EntryDraft) -> tuple:
    return (
        draft.class_id,
        int(draft.subject_id),
        draft.teacher_id,
        int(draft.timeslot_id),
        draft.room_id,
        int(draft.day_of_week),
        int(bool(draft.recurring)),
        draft.start_date,
        draft.end_date,
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_entries(
        self,
        *,
        class_id: Optional[str] = None,
        teacher_id: Optional[str] = None,
        subject_id: Optional[int] = None,
        day_of_week: Optional[int] = None,
    ) -> Sequence[TimetableEntry]:
        where, params = build_where(
            {
                "class_id": class_id,
                "teacher_id": teacher_id,
                "subject_id": subject_id,
                "day_of_week": day_of_week,
            }
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM timetable_entries WHERE {where} ORDER BY day_of_week ASC, id ASC",
                params,
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: int) -> Optional[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timetable_entries WHERE id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def create(self, draft: EntryDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable_entries
                    (class_id, subject_id, teacher_id, timeslot_id, room_id,
                     day_of_week, recurring, start_date, end_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def replace(self, *, entry_id: int, draft: EntryDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timetable_entries
                SET class_id=%s, subject_id=%s, teacher_id=%s, timeslot_id=%s, room_id=%s,
                    day_of_week=%s, recurring=%s, start_date=%s, end_date=%s
                WHERE id=%s
                """,
                _draft_params(draft) + (int(entry_id),),
            )

    def delete(self, *, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetable_entries WHERE id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def count_for_timeslot(self, timeslot_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM timetable_entries WHERE timeslot_id=%s", (int(timeslot_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_for_room(self, room_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM timetable_entries WHERE room_id=%s", (int(room_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

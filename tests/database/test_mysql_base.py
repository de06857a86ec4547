from datetime import date, time, timedelta

import pytest
from mysql.connector import errors as mysql_errors

from school_timetable.calendars.mysql_calendar_repository import MySQLCalendarRepository
from school_timetable.core.exceptions import ReferentialBlockError, TransientError
from school_timetable.database.mysql_base import (
    build_where,
    db_cursor,
    mysql_date_text,
    mysql_time_text,
    normalize_mysql_time,
)
from school_timetable.terms.mysql_term_repository import MySQLTermRepository


class FakeCursor:
    def __init__(self):
        self.closed = False
        self.executed = []
        self.rowcount = 1
        self.lastrowid = 7

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), params))

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.commits = 0
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.commits += 1
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error

    def connect(self):
        if self.error is not None:
            raise self.error
        return self.conn


def test_block_commits_as_one_transaction():
    conn = FakeConnection()

    with db_cursor(FakeFactory(conn)) as (c, cur):
        assert c is conn

    assert conn.committed and not conn.rolled_back
    assert conn.cursor_obj.closed and conn.closed


def test_failure_rolls_back_and_propagates():
    conn = FakeConnection()

    with pytest.raises(ValueError):
        with db_cursor(FakeFactory(conn)):
            raise ValueError("boom")

    assert conn.rolled_back and not conn.committed
    assert conn.closed


def test_timeout_inside_block_is_transient():
    conn = FakeConnection()

    with pytest.raises(TransientError) as exc_info:
        with db_cursor(FakeFactory(conn)):
            raise mysql_errors.OperationalError("Lost connection to MySQL server during query")

    assert exc_info.value.retryable
    assert conn.rolled_back


def test_unreachable_store_is_transient():
    factory = FakeFactory(error=mysql_errors.InterfaceError("Can't connect to MySQL server"))

    with pytest.raises(TransientError):
        with db_cursor(factory):
            pass


def test_integrity_errors_are_not_transient():
    conn = FakeConnection()

    with pytest.raises(mysql_errors.IntegrityError):
        with db_cursor(FakeFactory(conn)):
            raise mysql_errors.IntegrityError("Duplicate entry")


def test_foreign_key_refusal_is_a_referential_block():
    conn = FakeConnection()

    with pytest.raises(ReferentialBlockError) as exc_info:
        with db_cursor(FakeFactory(conn)):
            raise mysql_errors.IntegrityError(msg="Cannot delete or update a parent row", errno=1451)

    assert not exc_info.value.retryable
    assert conn.rolled_back and not conn.committed


def test_build_where_skips_none():
    assert build_where({"class_id": "10A", "teacher_id": None, "day_of_week": 1}) == (
        "class_id=%s AND day_of_week=%s",
        ("10A", 1),
    )
    assert build_where({"class_id": None}) == ("1=1", ())


def test_time_values_from_any_connector_shape():
    assert normalize_mysql_time(timedelta(hours=8, minutes=5)) == time(8, 5)
    assert normalize_mysql_time("8:05") == time(8, 5)
    assert mysql_time_text(timedelta(hours=13, minutes=30)) == "13:30:00"
    assert mysql_time_text(None) is None


def test_date_values_as_iso_text():
    assert mysql_date_text(date(2024, 9, 9)) == "2024-09-09"
    assert mysql_date_text("2024-09-09 00:00:00") == "2024-09-09"
    assert mysql_date_text(None) is None


def test_set_current_term_clears_and_sets_in_one_commit():
    conn = FakeConnection()

    MySQLTermRepository(FakeFactory(conn)).set_current(calendar_id=1, term_id=5)

    statements = [sql for sql, _ in conn.cursor_obj.executed]
    assert statements == [
        "UPDATE calendar_terms SET is_current=0 WHERE calendar_id=%s AND id<>%s",
        "UPDATE calendar_terms SET is_current=1 WHERE id=%s",
    ]
    assert conn.commits == 1


def test_activate_calendar_is_one_transaction():
    conn = FakeConnection()

    MySQLCalendarRepository(FakeFactory(conn)).activate(calendar_id=3)

    assert len(conn.cursor_obj.executed) == 2
    assert conn.commits == 1

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple

import mysql.connector
from mysql.connector import errors as mysql_errors

from ..core.constants import HMS_TIME_FORMAT, ISO_DATE_FORMAT
from ..core.exceptions import ReferentialBlockError, TransientError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connection loss and timeouts.
_TRANSIENT_ERRORS = (mysql_errors.OperationalError, mysql_errors.InterfaceError)

# ER_ROW_IS_REFERENCED / ER_ROW_IS_REFERENCED_2: a foreign key still points at the row.
_ROW_IS_REFERENCED = {1217, 1451}


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Everything executed in the block commits together or not at all.
    """

    try:
        conn = conn_factory.connect()
    except _TRANSIENT_ERRORS as exc:
        logger.warning("Database unreachable: %s", exc)
        raise TransientError("Data store is unreachable, please retry") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _TRANSIENT_ERRORS as exc:
        _safe_rollback(conn)
        logger.warning("Database call failed: %s", exc)
        raise TransientError("Data store timed out, please retry") from exc
    except mysql_errors.IntegrityError as exc:
        _safe_rollback(conn)
        if exc.errno in _ROW_IS_REFERENCED:
            logger.info("Delete refused by foreign key: %s", exc)
            raise ReferentialBlockError("Record is still referenced by other records") from exc
        raise
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed on a broken connection")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def build_where(filters: Dict[str, Any]) -> Tuple[str, Tuple[Any, ...]]:
    """Equality filter clause from ``{column: value}``; ``None`` values are skipped."""

    clauses: list[str] = []
    params: list[Any] = []
    for column, value in filters.items():
        if value is None:
            continue
        clauses.append(f"{column}=%s")
        params.append(value)
    where = " AND ".join(clauses) if clauses else "1=1"
    return where, tuple(params)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def mysql_time_text(value: Any) -> Optional[str]:
    """TIME column as zero-padded ``HH:MM:SS`` text."""
    normalized = normalize_mysql_time(value)
    return normalized.strftime(HMS_TIME_FORMAT) if normalized else None


def mysql_date_text(value: Any) -> Optional[str]:
    """DATE column as ``YYYY-MM-DD`` text."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime(ISO_DATE_FORMAT)
    return str(value)[:10]

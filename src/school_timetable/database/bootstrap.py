"""Schema and seed loading for the ``schema.sql`` and ``seed.sql`` shipped beside this module."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Mapping

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")
SEED_PATH = Path(__file__).with_name("seed.sql")

# Quoted strings are kept whole so a ';' inside a literal never splits a statement.
_SQL_TOKEN = re.compile(
    r"""
      (?P<quoted>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`[^`]*`)
    | (?P<comment>--[^\n]*)
    | (?P<end>;)
    | (?P<text>[^'"`;-]+|-)
    """,
    re.VERBOSE | re.DOTALL,
)

# The files name their own database; the configured one wins.
_DB_SELECTION = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_sql_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a SQL script, without comments or trailing ';'."""

    parts: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        kind = match.lastgroup
        if kind == "comment":
            continue
        if kind == "end":
            statement = "".join(parts).strip()
            parts.clear()
            if statement:
                yield statement
            continue
        parts.append(match.group())

    statement = "".join(parts).strip()
    if statement:
        yield statement


def _script_statements(path: str | Path) -> list[str]:
    sql = Path(path).read_text(encoding="utf-8")
    return [s for s in split_sql_statements(sql) if not _DB_SELECTION.match(s)]


def ensure_database_exists(db_config: Mapping) -> None:
    config = DBConfig.from_mapping(db_config)
    with closing(mysql.connector.connect(**config.connect_kwargs(with_database=False))) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        conn.commit()


def _run_script(db_config: Mapping, path: str | Path) -> int:
    statements = _script_statements(path)
    config = DBConfig.from_mapping(db_config)
    with closing(mysql.connector.connect(**config.connect_kwargs())) as conn:
        with closing(conn.cursor()) as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()
    logger.debug("Applied %s statement(s) from %s", len(statements), path)
    return len(statements)


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def list_tables(db_config: Mapping) -> list[str]:
    config = DBConfig.from_mapping(db_config)
    with closing(mysql.connector.connect(**config.connect_kwargs())) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute("SHOW TABLES")
            return [row[0] for row in cur.fetchall()]

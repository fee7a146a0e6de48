"""Short-lived MySQL sessions for the repositories.

Each helper opens its own connection. A block commits when it exits cleanly
and rolls back otherwise.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection) -> Iterator[Any]:
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def query_one(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return cur.fetchone() or None


def query_all(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> list[dict]:
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return list(cur.fetchall() or [])


def execute(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> int:
    """Run one write statement; returns the affected row count."""
    with db_cursor(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return int(cur.rowcount)

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

import mysql.connector

from ..core.constants import STREAM_BATCH_SIZE
from ..core.exceptions import StorageFailure
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        logger.error("Database operation failed: %s", exc)
        raise StorageFailure(f"Database operation failed: {exc}") from exc
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


def iter_rows(
    conn_factory: DatabaseConnection,
    sql: str,
    params: Sequence[Any] = (),
    *,
    batch_size: int = STREAM_BATCH_SIZE,
) -> Iterator[Dict[str, Any]]:
    """Stream a SELECT in batches; the connection is held until exhausted or closed."""

    with db_cursor(conn_factory) as (_, cur):
        cur.execute(sql, tuple(params))
        exhausted = False
        try:
            while True:
                batch = cur.fetchmany(batch_size)
                if not batch:
                    exhausted = True
                    break
                yield from batch
        finally:
            # Unread rows must be consumed before the cursor can be closed.
            if not exhausted:
                cur.fetchall()

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreUnavailableError
from ..core.logging import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Driver errors surface as ``StoreUnavailableError``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Record store connection failed: %s", exc)
        raise StoreUnavailableError("Record store is unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Record store query failed: %s", exc)
        raise StoreUnavailableError("Record store rejected the request") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def build_where(filters: list[tuple[str, Any]]) -> tuple[str, tuple]:
    """Join ``(clause, param)`` pairs into a WHERE fragment, skipping None params."""
    clauses = ["1=1"]
    params: list[Any] = []
    for clause, value in filters:
        if value is None:
            continue
        clauses.append(clause)
        params.append(value)
    return " AND ".join(clauses), tuple(params)

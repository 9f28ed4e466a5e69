from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..common.datetime_utils import to_local
from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, conflict_message: Optional[str] = None):
    """Yield (conn, cursor); commit on success, rollback on error.

    A unique-key violation is re-raised as ConflictError when conflict_message is given.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        if conflict_message:
            raise ConflictError(conflict_message) from exc
        raise
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


def to_db_timestamp(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC DATETIME values."""
    if value.tzinfo is None:
        value = to_local(value)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return to_local(value.replace(tzinfo=timezone.utc))


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"))

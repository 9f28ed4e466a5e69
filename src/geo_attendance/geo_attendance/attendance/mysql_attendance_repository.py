from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_local
from ..core.enums import PunchType
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_timestamp, to_db_timestamp
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, punch_type, punched_at, latitude, longitude"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        type=PunchType(r["punch_type"]),
        timestamp=from_db_timestamp(r["punched_at"]),
        latitude=r.get("latitude"),
        longitude=r.get("longitude"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                ORDER BY punched_at
                """,
                (int(user_id), work_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND punched_at >= %s AND punched_at < %s
                ORDER BY punched_at
                """,
                (int(user_id), to_db_timestamp(start), to_db_timestamp(end)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def exists_between(self, user_id: int, punch_type: PunchType, since: datetime, until: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS hit
                FROM attendance_records
                WHERE user_id=%s AND punch_type=%s AND punched_at >= %s AND punched_at <= %s
                LIMIT 1
                """,
                (int(user_id), punch_type.value, to_db_timestamp(since), to_db_timestamp(until)),
            )
            return fetchone(cur) is not None

    def get_latest_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY punched_at DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        punch_type: PunchType,
        timestamp: datetime,
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> AttendanceRecord:
        message = f"already clocked {punch_type.value} today"
        with db_cursor(self._conn_factory, conflict_message=message) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, punch_type, work_date, punched_at, latitude, longitude)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    punch_type.value,
                    to_local(timestamp).date(),
                    to_db_timestamp(timestamp),
                    latitude,
                    longitude,
                ),
            )
            new_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=new_id,
            user_id=int(user_id),
            type=punch_type,
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
        )

    def replace_with_correction(
        self,
        *,
        attendance_id: int,
        punch_type: PunchType,
        timestamp: datetime,
    ) -> AttendanceRecord:
        message = f"a {punch_type.value} record already exists for that day"
        with db_cursor(self._conn_factory, conflict_message=message) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_type=%s, work_date=%s, punched_at=%s
                WHERE attendance_id=%s
                """,
                (
                    punch_type.value,
                    to_local(timestamp).date(),
                    to_db_timestamp(timestamp),
                    int(attendance_id),
                ),
            )

        record = self.get_by_id(attendance_id)
        if record is None:
            raise NotFoundError("target record not found")
        return record

    def count_for_date(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM attendance_records WHERE work_date=%s",
                (work_date,),
            )
            return int(fetchone(cur)["n"])

    def count_clocked_in_users(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT user_id) AS n
                FROM attendance_records
                WHERE work_date=%s AND punch_type=%s
                """,
                (work_date, PunchType.IN.value),
            )
            return int(fetchone(cur)["n"])

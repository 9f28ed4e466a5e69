from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CorrectionType, PunchType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_timestamp, to_db_timestamp
from .model import TimeCorrection
from .repository import CorrectionRepository

_COLUMNS = (
    "correction_id, user_id, attendance_id, request_type, before_time, current_type, "
    "requested_time, requested_type, reason, status, approver_id, approved_at, created_at"
)


def _to_correction(r: Dict[str, Any]) -> TimeCorrection:
    return TimeCorrection(
        correction_id=int(r["correction_id"]),
        user_id=int(r["user_id"]),
        attendance_id=int(r["attendance_id"]),
        request_type=CorrectionType(r["request_type"]),
        before_time=from_db_timestamp(r["before_time"]),
        current_type=PunchType(r["current_type"]),
        requested_time=from_db_timestamp(r.get("requested_time")),
        requested_type=PunchType(r["requested_type"]) if r.get("requested_type") else None,
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        approver_id=r.get("approver_id"),
        approved_at=from_db_timestamp(r.get("approved_at")),
        created_at=from_db_timestamp(r["created_at"]),
    )


class MySQLCorrectionRepository(CorrectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        attendance_id: int,
        request_type: CorrectionType,
        before_time: datetime,
        current_type: PunchType,
        requested_time: Optional[datetime],
        requested_type: Optional[PunchType],
        reason: str,
        created_at: datetime,
    ) -> TimeCorrection:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_corrections(
                    user_id, attendance_id, request_type, before_time, current_type,
                    requested_time, requested_type, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    int(attendance_id),
                    request_type.value,
                    to_db_timestamp(before_time),
                    current_type.value,
                    to_db_timestamp(requested_time) if requested_time else None,
                    requested_type.value if requested_type else None,
                    reason,
                    RequestStatus.PENDING.value,
                    to_db_timestamp(created_at),
                ),
            )
            new_id = int(cur.lastrowid)

        return TimeCorrection(
            correction_id=new_id,
            user_id=int(user_id),
            attendance_id=int(attendance_id),
            request_type=request_type,
            before_time=before_time,
            current_type=current_type,
            requested_time=requested_time,
            requested_type=requested_type,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )

    def get_by_id(self, correction_id: int) -> Optional[TimeCorrection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_corrections WHERE correction_id=%s",
                (int(correction_id),),
            )
            r = fetchone(cur)
            return _to_correction(r) if r else None

    def decide(
        self,
        *,
        correction_id: int,
        status: RequestStatus,
        approver_id: int,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_corrections
                SET status=%s, approver_id=%s, approved_at=%s
                WHERE correction_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(approver_id),
                    to_db_timestamp(decided_at),
                    int(correction_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[TimeCorrection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_corrections
                WHERE user_id=%s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_correction(r) for r in fetchall(cur)]

    def list_by_status(self, status: RequestStatus, *, limit: int = 200) -> Sequence[TimeCorrection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_corrections
                WHERE status=%s
                ORDER BY created_at
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_correction(r) for r in fetchall(cur)]

    def count_by_status(self, status: RequestStatus, *, user_id: Optional[int] = None) -> int:
        clauses = ["status=%s"]
        params: list[object] = [status.value]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS n FROM time_corrections WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            return int(fetchone(cur)["n"])

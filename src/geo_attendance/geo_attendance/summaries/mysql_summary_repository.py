from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import SummaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceSummary, Holiday, hours
from .repository import HolidayRepository, SummaryRepository

_COLUMNS = (
    "summary_id, user_id, target_date, summary_type, "
    "total_hours, overtime_hours, late_night_hours, holiday_hours"
)


def _to_summary(r: Dict[str, Any]) -> AttendanceSummary:
    return AttendanceSummary(
        summary_id=int(r["summary_id"]),
        user_id=int(r["user_id"]),
        target_date=r["target_date"],
        summary_type=SummaryType(r["summary_type"]),
        total_hours=hours(r.get("total_hours")),
        overtime_hours=hours(r.get("overtime_hours")),
        late_night_hours=r.get("late_night_hours"),
        holiday_hours=r.get("holiday_hours"),
    )


class MySQLSummaryRepository(SummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_key(self, user_id: int, target_date: date, summary_type: SummaryType) -> Optional[AttendanceSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_summaries
                WHERE user_id=%s AND target_date=%s AND summary_type=%s
                """,
                (int(user_id), target_date, summary_type.value),
            )
            r = fetchone(cur)
            return _to_summary(r) if r else None

    def upsert(self, summary: AttendanceSummary) -> AttendanceSummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_summaries(
                    user_id, target_date, summary_type,
                    total_hours, overtime_hours, late_night_hours, holiday_hours
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    total_hours=VALUES(total_hours),
                    overtime_hours=VALUES(overtime_hours),
                    late_night_hours=VALUES(late_night_hours),
                    holiday_hours=VALUES(holiday_hours)
                """,
                (
                    int(summary.user_id),
                    summary.target_date,
                    summary.summary_type.value,
                    hours(summary.total_hours),
                    hours(summary.overtime_hours),
                    hours(summary.late_night_hours),
                    hours(summary.holiday_hours),
                ),
            )

        stored = self.get_by_key(summary.user_id, summary.target_date, summary.summary_type)
        return stored or summary

    def delete_by_key(self, user_id: int, target_date: date, summary_type: SummaryType) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM attendance_summaries
                WHERE user_id=%s AND target_date=%s AND summary_type=%s
                """,
                (int(user_id), target_date, summary_type.value),
            )
            return cur.rowcount > 0

    def list_between(
        self,
        start_date: date,
        end_date: date,
        *,
        summary_type: Optional[SummaryType] = None,
    ) -> Sequence[AttendanceSummary]:
        return self._query(start_date=start_date, end_date=end_date, summary_type=summary_type)

    def list_for_user_between(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
        *,
        summary_type: Optional[SummaryType] = None,
    ) -> Sequence[AttendanceSummary]:
        return self._query(start_date=start_date, end_date=end_date, summary_type=summary_type, user_id=user_id)

    def _query(
        self,
        *,
        start_date: date,
        end_date: date,
        summary_type: Optional[SummaryType],
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceSummary]:
        clauses = ["target_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if summary_type is not None:
            clauses.append("summary_type=%s")
            params.append(summary_type.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_summaries
                WHERE {where}
                ORDER BY target_date, user_id
                """,
                tuple(params),
            )
            return [_to_summary(r) for r in fetchall(cur)]


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_on(self, day: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_date, name, is_recurring
                FROM holidays
                WHERE holiday_date=%s
                   OR (is_recurring=1 AND MONTH(holiday_date)=%s AND DAY(holiday_date)=%s)
                LIMIT 1
                """,
                (day, day.month, day.day),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Holiday(holiday_date=r["holiday_date"], name=r["name"], is_recurring=bool(r["is_recurring"]))

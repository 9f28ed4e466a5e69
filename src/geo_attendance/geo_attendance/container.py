from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DUPLICATE_PUNCH_WINDOW_MINUTES, LATE_NIGHT_END, LATE_NIGHT_START, STANDARD_WORK_HOURS
from .corrections.mysql_correction_repository import MySQLCorrectionRepository
from .corrections.service import TimeCorrectionService
from .database.connection import DBConfig, DatabaseConnection
from .leave.service import PaidLeaveService
from .locations.geo import GeoValidator
from .locations.mysql_location_repository import MySQLWorkLocationRepository
from .notifications.notifier import LoggingNotifier
from .summaries.calculator.standard_calculator import StandardWorkTimeCalculator
from .summaries.holidays import HolidayCalendar
from .summaries.mysql_summary_repository import MySQLHolidayRepository, MySQLSummaryRepository
from .summaries.service import SummaryService
from .users.mysql_user_repository import MySQLDepartmentRepository, MySQLUserRepository


@dataclass(frozen=True)
class Container:
    attendance_service: AttendanceService
    summary_service: SummaryService
    correction_service: TimeCorrectionService
    paid_leave_service: PaidLeaveService

    conn: Optional[DatabaseConnection] = None


def build_container(
    *,
    db_config: dict,
    standard_hours: Decimal = STANDARD_WORK_HOURS,
    duplicate_window_minutes: int = DUPLICATE_PUNCH_WINDOW_MINUTES,
    late_night_start: time = LATE_NIGHT_START,
    late_night_end: time = LATE_NIGHT_END,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    locations_repo = MySQLWorkLocationRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    summaries_repo = MySQLSummaryRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    corrections_repo = MySQLCorrectionRepository(conn)

    summary_service = SummaryService(
        attendance_repo,
        summaries_repo,
        calendar=HolidayCalendar(holidays_repo),
        departments=departments_repo,
        calculator=StandardWorkTimeCalculator(
            standard_hours=Decimal(standard_hours),
            late_night_start=late_night_start,
            late_night_end=late_night_end,
        ),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        GeoValidator(locations_repo),
        summary_service,
        duplicate_window_minutes=duplicate_window_minutes,
    )
    correction_service = TimeCorrectionService(
        corrections_repo,
        attendance_repo,
        users_repo,
        notifier=LoggingNotifier(),
    )
    paid_leave_service = PaidLeaveService(users_repo)

    return Container(
        attendance_service=attendance_service,
        summary_service=summary_service,
        correction_service=correction_service,
        paid_leave_service=paid_leave_service,
        conn=conn,
    )

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, require_date_range
from ..core.enums import DailyStatus, PunchType, SummaryType
from ..users.repository import DepartmentRepository
from .calculator.base import WorkTimeCalculator
from .calculator.standard_calculator import StandardWorkTimeCalculator
from .holidays import HolidayCalendar
from .model import (
    ZERO,
    AttendanceSummary,
    DailySummaryData,
    DepartmentStatistics,
    HourTotals,
    OvertimeAssessment,
    PersonalStatistics,
    hours,
)
from .overtime import classify_overtime
from .repository import SummaryRepository

logger = logging.getLogger(__name__)


class SummaryService:
    """Derives daily/monthly work-hour summaries from punches and aggregates them.

    This service is the only writer of AttendanceSummary rows.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        summaries: SummaryRepository,
        *,
        calendar: Optional[HolidayCalendar] = None,
        departments: Optional[DepartmentRepository] = None,
        calculator: Optional[WorkTimeCalculator] = None,
    ):
        self._attendance = attendance
        self._summaries = summaries
        self._calendar = calendar or HolidayCalendar()
        self._departments = departments
        self._calculator = calculator or StandardWorkTimeCalculator()

    # -------- Daily --------
    def get_daily_summary(self, user_id: int, day: date) -> DailySummaryData:
        records = self._attendance.list_for_user_and_date(int(user_id), day)
        clock_in = next((r for r in records if r.type == PunchType.IN), None)
        clock_out = next((r for r in records if r.type == PunchType.OUT), None)

        if clock_in is None:
            return DailySummaryData(date=day, status=DailyStatus.NONE, clock_out=clock_out)
        if clock_out is None:
            return DailySummaryData(date=day, status=DailyStatus.IN_PROGRESS, clock_in=clock_in)

        breakdown = self._calculator.calculate(
            clock_in.timestamp,
            clock_out.timestamp,
            is_holiday=self._calendar.is_holiday(clock_in.work_date),
        )
        return DailySummaryData(
            date=day,
            status=DailyStatus.COMPLETED,
            breakdown=breakdown,
            clock_in=clock_in,
            clock_out=clock_out,
        )

    def update_daily_summary(self, user_id: int, day: date) -> Optional[AttendanceSummary]:
        """Recompute and upsert the daily row.

        A day without both punches has no row; one stored earlier is removed.
        """
        data = self.get_daily_summary(user_id, day)
        if data.status != DailyStatus.COMPLETED:
            if self._summaries.delete_by_key(int(user_id), day, SummaryType.DAILY):
                logger.info("stale daily summary removed: user_id=%s date=%s", user_id, day)
            else:
                logger.info("daily summary skipped (punches incomplete): user_id=%s date=%s", user_id, day)
            return None

        summary = self._summaries.upsert(
            AttendanceSummary(
                summary_id=None,
                user_id=int(user_id),
                target_date=day,
                summary_type=SummaryType.DAILY,
                total_hours=data.breakdown.total_hours,
                overtime_hours=data.breakdown.overtime_hours,
                late_night_hours=data.breakdown.late_night_hours,
                holiday_hours=data.breakdown.holiday_hours,
            )
        )
        logger.info(
            "daily summary updated: user_id=%s date=%s total_hours=%s", user_id, day, summary.total_hours
        )
        return summary

    def get_daily_summaries(self, start_date: date, end_date: date) -> Sequence[AttendanceSummary]:
        require_date_range(start_date, end_date)
        return self._summaries.list_between(start_date, end_date, summary_type=SummaryType.DAILY)

    # -------- Monthly --------
    def generate_monthly_summary(self, user_id: int, year: int, month: int) -> Optional[AttendanceSummary]:
        first, last = month_bounds(year, month)
        dailies = self._summaries.list_for_user_between(
            int(user_id), first, last, summary_type=SummaryType.DAILY
        )
        if not dailies:
            logger.info("monthly summary skipped (no daily rows): user_id=%s month=%s", user_id, first)
            return None

        totals = HourTotals.of(dailies)
        summary = self._summaries.upsert(
            AttendanceSummary(
                summary_id=None,
                user_id=int(user_id),
                target_date=first,
                summary_type=SummaryType.MONTHLY,
                total_hours=totals.total_hours,
                overtime_hours=totals.overtime_hours,
                late_night_hours=totals.late_night_hours,
                holiday_hours=totals.holiday_hours,
            )
        )
        logger.info("monthly summary updated: user_id=%s month=%s days=%d", user_id, first, len(dailies))
        return summary

    def get_monthly_summaries(self, year: int, month: int) -> Sequence[AttendanceSummary]:
        first, last = month_bounds(year, month)
        return self._summaries.list_between(first, last, summary_type=SummaryType.MONTHLY)

    def assess_overtime(self, user_id: int, year: int, month: int) -> Optional[OvertimeAssessment]:
        summary = self.generate_monthly_summary(user_id, year, month)
        if summary is None:
            return None
        return classify_overtime(summary)

    # -------- Statistics --------
    def get_summary_statistics(self, start_date: date, end_date: date) -> HourTotals:
        require_date_range(start_date, end_date)
        rows = self._summaries.list_between(start_date, end_date, summary_type=SummaryType.DAILY)
        return HourTotals.of(rows)

    def get_personal_statistics(self, user_id: int, start_date: date, end_date: date) -> PersonalStatistics:
        require_date_range(start_date, end_date)
        rows = self._summaries.list_for_user_between(
            int(user_id), start_date, end_date, summary_type=SummaryType.DAILY
        )
        return PersonalStatistics(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            totals=HourTotals.of(rows),
        )

    def get_department_statistics(self, dept_id: int, start_date: date, end_date: date) -> DepartmentStatistics:
        require_date_range(start_date, end_date)
        if self._departments is None:
            raise RuntimeError("department directory is not configured")

        member_ids = list(self._departments.list_member_ids(int(dept_id)))
        totals = HourTotals()
        for user_id in member_ids:
            totals = totals + self.get_personal_statistics(user_id, start_date, end_date).totals

        return DepartmentStatistics(
            department_id=int(dept_id),
            start_date=start_date,
            end_date=end_date,
            user_count=len(member_ids),
            totals=totals,
        )

    def get_monthly_statistics(self, start_date: date, end_date: date) -> dict:
        require_date_range(start_date, end_date)
        rows = self._summaries.list_between(start_date, end_date, summary_type=SummaryType.DAILY)

        monthly: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for s in rows:
            monthly[s.target_date.replace(day=1).isoformat()] += hours(s.total_hours)

        total = sum((hours(s.total_hours) for s in rows), ZERO)
        average = hours(total / len(rows)) if rows else ZERO
        return {
            "monthlyHours": {k: float(v) for k, v in sorted(monthly.items())},
            "averageDailyHours": float(average),
        }

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import DailyStatus, OvertimeStatus, SummaryType

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def hours(value: Optional[Decimal]) -> Decimal:
    """Normalize an hours value: None counts as zero, two fraction digits."""
    if value is None:
        return ZERO
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class AttendanceSummary:
    """Aggregated work hours for a user over a day or a month.

    Identified by (user_id, target_date, summary_type); recomputed, never hand-edited.
    """

    summary_id: Optional[int]
    user_id: int
    target_date: date
    summary_type: SummaryType
    total_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    late_night_hours: Optional[Decimal] = ZERO
    holiday_hours: Optional[Decimal] = ZERO

    def to_dict(self) -> dict:
        return {
            "id": self.summary_id,
            "userId": self.user_id,
            "targetDate": self.target_date.isoformat(),
            "summaryType": self.summary_type.value,
            "totalHours": float(hours(self.total_hours)),
            "overtimeHours": float(hours(self.overtime_hours)),
            "lateNightHours": float(hours(self.late_night_hours)),
            "holidayHours": float(hours(self.holiday_hours)),
        }


@dataclass(frozen=True)
class WorkTimeBreakdown:
    total_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    late_night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO


@dataclass(frozen=True)
class DailySummaryData:
    date: date
    status: DailyStatus
    breakdown: WorkTimeBreakdown = WorkTimeBreakdown()
    clock_in: Optional[AttendanceRecord] = None
    clock_out: Optional[AttendanceRecord] = None

    @property
    def total_hours(self) -> Decimal:
        return self.breakdown.total_hours

    @property
    def overtime_hours(self) -> Decimal:
        return self.breakdown.overtime_hours

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "status": self.status.value,
            "totalHours": float(self.breakdown.total_hours),
            "overtimeHours": float(self.breakdown.overtime_hours),
            "lateNightHours": float(self.breakdown.late_night_hours),
            "holidayHours": float(self.breakdown.holiday_hours),
            "clockInRecord": self.clock_in.to_dict() if self.clock_in else None,
            "clockOutRecord": self.clock_out.to_dict() if self.clock_out else None,
        }


@dataclass(frozen=True)
class HourTotals:
    total_records: int = 0
    total_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    late_night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO

    @classmethod
    def of(cls, summaries: Iterable[AttendanceSummary]) -> "HourTotals":
        rows = list(summaries)
        return cls(
            total_records=len(rows),
            total_hours=sum((hours(s.total_hours) for s in rows), ZERO),
            overtime_hours=sum((hours(s.overtime_hours) for s in rows), ZERO),
            late_night_hours=sum((hours(s.late_night_hours) for s in rows), ZERO),
            holiday_hours=sum((hours(s.holiday_hours) for s in rows), ZERO),
        )

    def __add__(self, other: "HourTotals") -> "HourTotals":
        return HourTotals(
            total_records=self.total_records + other.total_records,
            total_hours=self.total_hours + other.total_hours,
            overtime_hours=self.overtime_hours + other.overtime_hours,
            late_night_hours=self.late_night_hours + other.late_night_hours,
            holiday_hours=self.holiday_hours + other.holiday_hours,
        )

    def to_dict(self) -> dict:
        return {
            "totalRecords": self.total_records,
            "totalHours": float(self.total_hours),
            "overtimeHours": float(self.overtime_hours),
            "lateNightHours": float(self.late_night_hours),
            "holidayHours": float(self.holiday_hours),
        }


@dataclass(frozen=True)
class PersonalStatistics:
    user_id: int
    start_date: date
    end_date: date
    totals: HourTotals

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            **self.totals.to_dict(),
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class DepartmentStatistics:
    department_id: int
    start_date: date
    end_date: date
    user_count: int
    totals: HourTotals

    @property
    def average_hours_per_user(self) -> Decimal:
        if self.user_count == 0:
            return ZERO
        return hours(self.totals.total_hours / self.user_count)

    def to_dict(self) -> dict:
        return {
            "departmentId": self.department_id,
            "userCount": self.user_count,
            **self.totals.to_dict(),
            "averageHoursPerUser": float(self.average_hours_per_user),
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class OvertimeAssessment:
    """Monthly overtime report row."""

    user_id: int
    target_month: date
    total_overtime: Decimal
    total_late_night: Decimal
    total_holiday: Decimal
    status: OvertimeStatus

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "targetMonth": self.target_month.isoformat(),
            "totalOvertime": float(self.total_overtime),
            "totalLateNight": float(self.total_late_night),
            "totalHoliday": float(self.total_holiday),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Holiday:
    holiday_date: date
    name: str
    is_recurring: bool = False

    def matches(self, day: date) -> bool:
        if self.is_recurring:
            return (self.holiday_date.month, self.holiday_date.day) == (day.month, day.day)
        return self.holiday_date == day

from __future__ import annotations

from decimal import Decimal

from ..core.constants import HOLIDAY_THRESHOLD_HOURS, LATE_NIGHT_THRESHOLD_HOURS, OVERTIME_THRESHOLD_HOURS
from ..core.enums import OvertimeStatus, SummaryType
from ..core.exceptions import ValidationError
from .model import ZERO, AttendanceSummary, OvertimeAssessment, hours


def overtime_status(overtime: Decimal, late_night: Decimal, holiday: Decimal) -> OvertimeStatus:
    if (
        overtime > OVERTIME_THRESHOLD_HOURS
        or late_night > LATE_NIGHT_THRESHOLD_HOURS
        or holiday > HOLIDAY_THRESHOLD_HOURS
    ):
        return OvertimeStatus.CONFIRMED
    if overtime > ZERO or late_night > ZERO or holiday > ZERO:
        return OvertimeStatus.DRAFT
    return OvertimeStatus.APPROVED


def classify_overtime(summary: AttendanceSummary) -> OvertimeAssessment:
    """Monthly overtime check: above any threshold needs review (confirmed)."""
    if summary.summary_type != SummaryType.MONTHLY:
        raise ValidationError("only monthly summaries can be assessed for overtime")

    overtime = hours(summary.overtime_hours)
    late_night = hours(summary.late_night_hours)
    holiday = hours(summary.holiday_hours)
    return OvertimeAssessment(
        user_id=summary.user_id,
        target_month=summary.target_date.replace(day=1),
        total_overtime=overtime,
        total_late_night=late_night,
        total_holiday=holiday,
        status=overtime_status(overtime, late_night, holiday),
    )

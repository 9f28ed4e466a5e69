from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from ...common.datetime_utils import to_local
from ...core.constants import LATE_NIGHT_END, LATE_NIGHT_START, STANDARD_WORK_HOURS
from ..model import CENT, ZERO, WorkTimeBreakdown
from .base import WorkTimeCalculator


def _minutes_to_hours(minutes: int) -> Decimal:
    return (Decimal(minutes) / Decimal(60)).quantize(CENT, rounding=ROUND_HALF_UP)


def _whole_minutes(start: datetime, end: datetime) -> int:
    # Same-zone subtraction is wall-clock; UTC gives elapsed time across DST shifts.
    elapsed = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return max(int(elapsed.total_seconds() // 60), 0)


class StandardWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: total = out - in (whole minutes), overtime beyond the standard day,
    late-night = overlap with the night band, holiday = everything on a holiday."""

    def __init__(
        self,
        *,
        standard_hours: Decimal = STANDARD_WORK_HOURS,
        late_night_start: time = LATE_NIGHT_START,
        late_night_end: time = LATE_NIGHT_END,
    ):
        self._standard_hours = Decimal(standard_hours)
        self._night_start = late_night_start
        self._night_end = late_night_end

    def calculate(self, clock_in: datetime, clock_out: datetime, *, is_holiday: bool) -> WorkTimeBreakdown:
        start = to_local(clock_in)
        end = to_local(clock_out)
        if end <= start:
            return WorkTimeBreakdown()

        total = _minutes_to_hours(_whole_minutes(start, end))
        overtime = max(total - self._standard_hours, ZERO).quantize(CENT)
        late_night = min(_minutes_to_hours(self.late_night_minutes(start, end)), total)
        holiday = total if is_holiday else ZERO

        return WorkTimeBreakdown(
            total_hours=total,
            overtime_hours=overtime,
            late_night_hours=late_night,
            holiday_hours=holiday,
        )

    def late_night_minutes(self, start: datetime, end: datetime) -> int:
        """Minutes of [start, end) that fall inside the night band, day by day."""
        wraps = self._night_end <= self._night_start
        tz = start.tzinfo
        minutes = 0

        # The band that started the previous evening may still cover the morning of `start`.
        day = start.date() - timedelta(days=1)
        while day <= end.date():
            band_start = datetime.combine(day, self._night_start, tzinfo=tz)
            band_end_day = day + timedelta(days=1) if wraps else day
            band_end = datetime.combine(band_end_day, self._night_end, tzinfo=tz)

            overlap_start = max(start, band_start)
            overlap_end = min(end, band_end)
            if overlap_start < overlap_end:
                minutes += _whole_minutes(overlap_start, overlap_end)
            day += timedelta(days=1)

        return minutes

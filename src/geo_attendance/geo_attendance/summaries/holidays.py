from __future__ import annotations

from datetime import date
from typing import Optional

from .repository import HolidayRepository


class HolidayCalendar:
    """Weekends plus the holiday table."""

    def __init__(self, holidays: Optional[HolidayRepository] = None):
        self._holidays = holidays

    def is_holiday(self, day: date) -> bool:
        if day.weekday() >= 5:
            return True
        if self._holidays is None:
            return False
        return self._holidays.find_on(day) is not None

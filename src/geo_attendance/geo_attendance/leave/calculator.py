from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.constants import PAID_LEAVE_DAYS_BY_YEARS
from ..users.model import User

logger = logging.getLogger(__name__)


def completed_years(start: date, as_of: date) -> int:
    """Số năm làm việc tròn (không làm tròn lên); âm nếu as_of < start."""
    years = as_of.year - start.year
    if (as_of.month, as_of.day) < (start.month, start.day):
        years -= 1
    return years


def entitlement_days(
    hire_date: date,
    as_of: date,
    *,
    table: Sequence[int] = PAID_LEAVE_DAYS_BY_YEARS,
) -> int:
    """Paid-leave days for a tenure: <1 year -> 0, then 10, 11, ... capped at the last entry."""
    if hire_date is None or as_of is None:
        raise TypeError("hire_date and as_of are required")

    years = completed_years(hire_date, as_of)
    if years <= 0:
        return 0
    return table[min(years, len(table) - 1)]


class PaidLeaveCalculator:
    def __init__(self, *, table: Sequence[int] = PAID_LEAVE_DAYS_BY_YEARS):
        self._table = tuple(table)

    def calculate_paid_leave_days(self, user: User, as_of: date) -> int:
        start: Optional[date] = user.tenure_start
        if start is None:
            raise TypeError(f"user {user.user_id} has no hire date")

        days = entitlement_days(start, as_of, table=self._table)
        logger.info(
            "paid leave calculated: user_id=%s tenure_start=%s as_of=%s days=%d",
            user.user_id,
            start,
            as_of,
            days,
        )
        return days

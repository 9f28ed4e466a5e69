"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_TIMEZONE = "Asia/Tokyo"

STANDARD_WORK_HOURS = Decimal("8")
DUPLICATE_PUNCH_WINDOW_MINUTES = 5

LATE_NIGHT_START = time(22, 0)
LATE_NIGHT_END = time(5, 0)

EARTH_RADIUS_METERS = 6_371_000

# Monthly thresholds used by the overtime monitor (hours).
OVERTIME_THRESHOLD_HOURS = Decimal("45.00")
LATE_NIGHT_THRESHOLD_HOURS = Decimal("20.00")
HOLIDAY_THRESHOLD_HOURS = Decimal("15.00")

# Paid-leave days by completed years of service; the last entry is the cap.
PAID_LEAVE_DAYS_BY_YEARS = (0, 10, 11, 12, 13, 14, 15)

DEFAULT_LIST_LIMIT = 200

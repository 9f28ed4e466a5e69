from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

_zone = ZoneInfo(DEFAULT_TIMEZONE)


def configure_timezone(name: str) -> None:
    """Set the zone used for 'today' boundaries and punch timestamps."""
    global _zone
    _zone = ZoneInfo(name)


def local_zone() -> ZoneInfo:
    return _zone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as local time."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_zone)
    return parsed


def now_local() -> datetime:
    """Current zoned time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(_zone)


def to_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=_zone)
    return value.astimezone(_zone)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) of a calendar day in the local zone."""
    start = datetime.combine(day, time.min, tzinfo=_zone)
    return start, start + timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month (YearMonth.atDay(1) .. atEndOfMonth())."""
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"invalid month: {month}")
    last = monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last)


def require_date_range(start: date, end: date) -> None:
    if start is None or end is None:
        raise ValidationError("start date and end date are required")
    if start > end:
        raise ValidationError("start date must not be after end date")

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_local
from ..core.enums import AttendanceState, PunchType


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): một lần chấm công (punch)."""

    attendance_id: int
    user_id: int
    type: PunchType
    timestamp: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def work_date(self) -> date:
        return to_local(self.timestamp).date()

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class PunchRequest:
    latitude: Optional[float]
    longitude: Optional[float]


@dataclass(frozen=True)
class PunchResponse:
    """Result-object form of a clock-in/clock-out (no exception on business failures)."""

    success: bool
    message: str
    record: Optional[AttendanceRecord] = None
    status: Optional[AttendanceState] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "record": self.record.to_dict() if self.record else None,
            "status": self.status.value if self.status else None,
        }

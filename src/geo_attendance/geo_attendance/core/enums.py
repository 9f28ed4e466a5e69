from __future__ import annotations

from enum import Enum


class LocationType(str, Enum):
    """Loại địa điểm làm việc của nhân viên."""

    OFFICE = "office"
    CLIENT = "client"


class PunchType(str, Enum):
    IN = "in"
    OUT = "out"


class AttendanceState(str, Enum):
    """Trạng thái chấm công hiện tại trong ngày."""

    NONE = "none"
    IN = "in"
    OUT = "out"


class DailyStatus(str, Enum):
    NONE = "none"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SummaryType(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


class CorrectionType(str, Enum):
    """What a time-correction request asks to change."""

    TIME = "time"
    TYPE = "type"
    BOTH = "both"


class RequestStatus(str, Enum):
    """Trạng thái luồng duyệt yêu cầu điều chỉnh."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OvertimeStatus(str, Enum):
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    APPROVED = "approved"

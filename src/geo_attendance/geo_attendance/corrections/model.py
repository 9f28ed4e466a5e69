from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CorrectionType, PunchType, RequestStatus


@dataclass(frozen=True)
class NewTimeCorrection:
    """Incoming correction request, still unvalidated (raw strings from the caller)."""

    attendance_id: Optional[int]
    request_type: Optional[str]
    reason: Optional[str]
    current_type: Optional[str] = None
    requested_time: Optional[datetime] = None
    requested_type: Optional[str] = None


@dataclass(frozen=True)
class TimeCorrection:
    correction_id: int
    user_id: int
    attendance_id: int
    request_type: CorrectionType
    before_time: datetime
    current_type: PunchType
    reason: str
    status: RequestStatus
    created_at: datetime
    requested_time: Optional[datetime] = None
    requested_type: Optional[PunchType] = None
    approver_id: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def changes_time(self) -> bool:
        return self.request_type in (CorrectionType.TIME, CorrectionType.BOTH)

    @property
    def changes_type(self) -> bool:
        return self.request_type in (CorrectionType.TYPE, CorrectionType.BOTH)

    def to_dict(self) -> dict:
        return {
            "id": self.correction_id,
            "userId": self.user_id,
            "attendanceId": self.attendance_id,
            "requestType": self.request_type.value,
            "beforeTime": self.before_time.isoformat(),
            "currentType": self.current_type.value,
            "requestedTime": self.requested_time.isoformat() if self.requested_time else None,
            "requestedType": self.requested_type.value if self.requested_type else None,
            "reason": self.reason,
            "status": self.status.value,
            "approverId": self.approver_id,
            "approvedAt": self.approved_at.isoformat() if self.approved_at else None,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class CorrectionResult:
    """Result-object form of the workflow operations."""

    success: bool
    message: str
    correction: Optional[TimeCorrection] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "timeCorrection": self.correction.to_dict() if self.correction else None,
        }

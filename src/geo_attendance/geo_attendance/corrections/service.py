from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence, Type, TypeVar

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, to_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import CorrectionType, PunchType, RequestStatus
from ..core.exceptions import AuthorizationError, ConflictError, DomainError, NotFoundError, ValidationError
from ..notifications.notifier import LoggingNotifier, Notifier
from ..users.repository import UserRepository
from .model import CorrectionResult, NewTimeCorrection, TimeCorrection
from .repository import CorrectionRepository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _parse_enum(enum_cls: Type[E], value: Optional[str], message: str) -> E:
    try:
        return enum_cls((value or "").strip().lower())
    except ValueError:
        raise ValidationError(message)


class TimeCorrectionService:
    """State machine for correction requests: pending -> approved | rejected (terminal).

    Approving a request does not touch the attendance record itself; see
    AttendanceService.apply_correction for that follow-up step.
    """

    def __init__(
        self,
        corrections: CorrectionRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._corrections = corrections
        self._attendance = attendance
        self._users = users
        self._notifier = notifier or LoggingNotifier()
        self._clock = clock

    # -------- Commands --------
    def create(self, request: NewTimeCorrection, user_id: int) -> TimeCorrection:
        logger.info("time correction requested: user_id=%s request_type=%s", user_id, request.request_type)

        request_type = _parse_enum(CorrectionType, request.request_type, "invalid request type")

        requested_time: Optional[datetime] = None
        requested_type: Optional[PunchType] = None
        if request_type in (CorrectionType.TIME, CorrectionType.BOTH):
            if request.requested_time is None:
                raise ValidationError("requested time required")
            requested_time = to_local(request.requested_time)
        if request_type in (CorrectionType.TYPE, CorrectionType.BOTH):
            if not (request.requested_type or "").strip():
                raise ValidationError("requested type required")
            requested_type = _parse_enum(PunchType, request.requested_type, "requested type must be 'in' or 'out'")

        current_type: Optional[PunchType] = None
        if (request.current_type or "").strip():
            current_type = _parse_enum(PunchType, request.current_type, "current type must be 'in' or 'out'")

        reason = require_non_empty(request.reason, "reason")

        if request.attendance_id is None:
            raise ValidationError("attendance id is required")

        if self._users.get_by_id(int(user_id)) is None:
            raise NotFoundError(f"user not found: {user_id}")

        try:
            attendance_id = int(request.attendance_id)
        except (TypeError, ValueError):
            raise ValidationError("attendance id is invalid")

        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise NotFoundError("target record not found")
        if record.user_id != int(user_id):
            raise AuthorizationError("cannot correct another user's record")

        correction = self._corrections.create(
            user_id=int(user_id),
            attendance_id=record.attendance_id,
            request_type=request_type,
            before_time=record.timestamp,
            current_type=current_type or record.type,
            requested_time=requested_time,
            requested_type=requested_type,
            reason=reason,
            created_at=self._clock(),
        )
        logger.info("time correction created: correction_id=%s", correction.correction_id)
        self._notify(self._notifier.correction_created, correction)
        return correction

    def approve(self, correction_id: int, approver_id: int) -> TimeCorrection:
        return self._decide(correction_id, approver_id, RequestStatus.APPROVED)

    def reject(self, correction_id: int, approver_id: int) -> TimeCorrection:
        return self._decide(correction_id, approver_id, RequestStatus.REJECTED)

    def _decide(self, correction_id: int, approver_id: int, status: RequestStatus) -> TimeCorrection:
        logger.info(
            "time correction decision: correction_id=%s approver_id=%s status=%s",
            correction_id,
            approver_id,
            status.value,
        )
        correction = self._corrections.get_by_id(int(correction_id))
        if correction is None:
            raise NotFoundError("correction not found")
        if correction.status != RequestStatus.PENDING:
            raise ConflictError("already processed")

        if self._users.get_by_id(int(approver_id)) is None:
            raise NotFoundError("approver not found")

        # Conditional update: a concurrent decision makes this return False.
        decided = self._corrections.decide(
            correction_id=int(correction_id),
            status=status,
            approver_id=int(approver_id),
            decided_at=self._clock(),
        )
        if not decided:
            raise ConflictError("already processed")

        updated = self._corrections.get_by_id(int(correction_id))
        if updated is None:
            raise NotFoundError("correction not found")

        logger.info("time correction %s: correction_id=%s", status.value, correction_id)
        self._notify(self._notifier.correction_decided, updated)
        return updated

    def _notify(self, send: Callable[[TimeCorrection], None], correction: TimeCorrection) -> None:
        try:
            send(correction)
        except Exception:
            logger.exception("notification failed: correction_id=%s", correction.correction_id)

    # -------- Result-object variants --------
    def create_time_correction(self, request: NewTimeCorrection, user_id: int) -> CorrectionResult:
        try:
            correction = self.create(request, user_id)
        except DomainError as e:
            logger.warning("time correction rejected: user_id=%s reason=%s", user_id, e)
            return CorrectionResult(success=False, message=str(e))
        return CorrectionResult(success=True, message="correction request submitted", correction=correction)

    def approve_time_correction(self, correction_id: int, approver_id: int) -> CorrectionResult:
        try:
            correction = self.approve(correction_id, approver_id)
        except DomainError as e:
            return CorrectionResult(success=False, message=str(e))
        return CorrectionResult(success=True, message="correction request approved", correction=correction)

    def reject_time_correction(self, correction_id: int, approver_id: int) -> CorrectionResult:
        try:
            correction = self.reject(correction_id, approver_id)
        except DomainError as e:
            return CorrectionResult(success=False, message=str(e))
        return CorrectionResult(success=True, message="correction request rejected", correction=correction)

    # -------- Queries --------
    def list_for_user(self, user_id: int) -> Sequence[TimeCorrection]:
        return self._corrections.list_for_user(int(user_id), limit=DEFAULT_LIST_LIMIT)

    def list_pending(self) -> Sequence[TimeCorrection]:
        return self._corrections.list_by_status(RequestStatus.PENDING, limit=DEFAULT_LIST_LIMIT)

    def count_pending_for_user(self, user_id: int) -> int:
        return self._corrections.count_by_status(RequestStatus.PENDING, user_id=int(user_id))

    def count_pending(self) -> int:
        return self._corrections.count_by_status(RequestStatus.PENDING)

    def get_by_id(self, correction_id: int) -> Optional[TimeCorrection]:
        return self._corrections.get_by_id(int(correction_id))

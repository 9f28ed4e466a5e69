from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import day_bounds, month_bounds, now_local, require_date_range, to_local
from ..core.constants import DUPLICATE_PUNCH_WINDOW_MINUTES
from ..core.enums import AttendanceState, PunchType, RequestStatus
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from ..corrections.model import TimeCorrection
from ..locations.geo import GeoValidator
from ..summaries.service import SummaryService
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceRecord, PunchRequest, PunchResponse
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Records clock-in/clock-out punches.

    Rules, in order: user exists, coordinates valid, inside the geofence (unless
    the user skips location checks), no same-day punch of that type, no punch of
    that type within the duplicate window. The (user, day, type) unique key in
    storage backs up the same-day rule against concurrent requests.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        geo: GeoValidator,
        summaries: Optional[SummaryService] = None,
        *,
        duplicate_window_minutes: int = DUPLICATE_PUNCH_WINDOW_MINUTES,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._users = users
        self._geo = geo
        self._summaries = summaries
        self._window = timedelta(minutes=int(duplicate_window_minutes))
        self._clock = clock

    def _load_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError(f"user not found: {user_id}")
        return user

    def _now(self, now: Optional[datetime]) -> datetime:
        return to_local(now) if now is not None else self._clock()

    def clock_in(
        self,
        user_id: int,
        latitude: Optional[float],
        longitude: Optional[float],
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = self._now(now)
        logger.info("clock-in: user_id=%s lat=%s lon=%s", user_id, latitude, longitude)

        user = self._load_user(user_id)
        self._geo.validate(user, latitude, longitude)

        today = self._attendance.list_for_user_and_date(user.user_id, now.date())
        if any(r.type == PunchType.IN for r in today):
            raise ConflictError("already clocked in")

        if self._attendance.exists_between(user.user_id, PunchType.IN, now - self._window, now):
            raise ConflictError(f"duplicate clock-in within {self._window_minutes} minutes")

        record = self._attendance.create(
            user_id=user.user_id,
            punch_type=PunchType.IN,
            timestamp=now,
            latitude=float(latitude),
            longitude=float(longitude),
        )
        logger.info("clock-in recorded: attendance_id=%s", record.attendance_id)
        return record

    def clock_out(
        self,
        user_id: int,
        latitude: Optional[float],
        longitude: Optional[float],
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = self._now(now)
        logger.info("clock-out: user_id=%s lat=%s lon=%s", user_id, latitude, longitude)

        user = self._load_user(user_id)
        self._geo.validate(user, latitude, longitude)

        today = self._attendance.list_for_user_and_date(user.user_id, now.date())
        if not any(r.type == PunchType.IN for r in today):
            raise ConflictError("no clock-in today")
        if any(r.type == PunchType.OUT for r in today):
            raise ConflictError("already clocked out")

        if self._attendance.exists_between(user.user_id, PunchType.OUT, now - self._window, now):
            raise ConflictError(f"duplicate clock-out within {self._window_minutes} minutes")

        record = self._attendance.create(
            user_id=user.user_id,
            punch_type=PunchType.OUT,
            timestamp=now,
            latitude=float(latitude),
            longitude=float(longitude),
        )
        logger.info("clock-out recorded: attendance_id=%s", record.attendance_id)

        self._refresh_summary(user.user_id, now.date())
        return record

    @property
    def _window_minutes(self) -> int:
        return int(self._window.total_seconds() // 60)

    def _refresh_summary(self, user_id: int, day: date) -> None:
        # The punch is already stored; summaries can be recomputed later.
        if self._summaries is None:
            return
        try:
            self._summaries.update_daily_summary(user_id, day)
        except Exception:
            logger.exception("daily summary update failed: user_id=%s date=%s", user_id, day)

    # -------- Result-object variants --------
    def clock_in_request(self, request: PunchRequest, user_id: int) -> PunchResponse:
        try:
            record = self.clock_in(user_id, request.latitude, request.longitude)
        except DomainError as e:
            logger.warning("clock-in rejected: user_id=%s reason=%s", user_id, e)
            return PunchResponse(success=False, message=str(e))
        return PunchResponse(
            success=True,
            message="clock-in completed",
            record=record,
            status=self.get_current_attendance_status(user_id),
        )

    def clock_out_request(self, request: PunchRequest, user_id: int) -> PunchResponse:
        try:
            record = self.clock_out(user_id, request.latitude, request.longitude)
        except DomainError as e:
            logger.warning("clock-out rejected: user_id=%s reason=%s", user_id, e)
            return PunchResponse(success=False, message=str(e))
        return PunchResponse(
            success=True,
            message="clock-out completed",
            record=record,
            status=self.get_current_attendance_status(user_id),
        )

    # -------- Corrections --------
    def apply_correction(self, correction: TimeCorrection) -> AttendanceRecord:
        """Write an approved correction back to its attendance record.

        Explicit follow-up to approval; the correction workflow never calls this.
        """
        if correction.status != RequestStatus.APPROVED:
            raise ConflictError("only approved corrections can be applied")

        record = self._attendance.get_by_id(correction.attendance_id)
        if record is None:
            raise NotFoundError("target record not found")
        if record.user_id != correction.user_id:
            raise ValidationError("correction does not match the record owner")
        # Applied, or superseded by a later correction.
        if record.timestamp != correction.before_time or (
            correction.changes_type and record.type != correction.current_type
        ):
            raise ConflictError("record has changed since the correction was filed")

        new_type = correction.requested_type if correction.changes_type else record.type
        new_time = to_local(correction.requested_time) if correction.changes_time else record.timestamp
        if new_type is None or new_time is None:
            raise ValidationError("correction is missing the requested value")

        self._check_corrected_day(record, new_type, new_time)

        updated = self._attendance.replace_with_correction(
            attendance_id=record.attendance_id,
            punch_type=new_type,
            timestamp=new_time,
        )
        logger.info(
            "correction applied: correction_id=%s attendance_id=%s type=%s timestamp=%s",
            correction.correction_id,
            record.attendance_id,
            new_type.value,
            new_time.isoformat(),
        )

        for day in sorted({record.work_date, updated.work_date}):
            self._refresh_summary(record.user_id, day)
        return updated

    def _check_corrected_day(self, record: AttendanceRecord, new_type: PunchType, new_time: datetime) -> None:
        day = to_local(new_time).date()
        others = [
            r for r in self._attendance.list_for_user_and_date(record.user_id, day)
            if r.attendance_id != record.attendance_id
        ]
        if any(r.type == new_type for r in others):
            raise ConflictError(f"a {new_type.value} record already exists for {day.isoformat()}")

        counterpart = next((r for r in others if r.type != new_type), None)
        if counterpart is None:
            return
        if new_type == PunchType.IN:
            clock_in, clock_out = new_time, counterpart.timestamp
        else:
            clock_in, clock_out = counterpart.timestamp, new_time
        if clock_out < clock_in:
            raise ValidationError("clock-out cannot be earlier than clock-in")

    # -------- Queries --------
    def get_current_attendance_status(self, user_id: int) -> AttendanceState:
        today = self._attendance.list_for_user_and_date(int(user_id), self._clock().date())
        if not today:
            return AttendanceState.NONE
        latest = max(today, key=lambda r: r.timestamp)
        return AttendanceState(latest.type.value)

    def get_today_records(self, user_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user_and_date(int(user_id), self._clock().date())

    def get_records_for_date(self, user_id: int, day: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user_and_date(int(user_id), day)

    def get_records_in_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        require_date_range(start_date, end_date)
        start, _ = day_bounds(start_date)
        _, end = day_bounds(end_date)
        return self._attendance.list_for_user_between(int(user_id), start, end)

    def get_monthly_records(self, user_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        first, last = month_bounds(year, month)
        return self.get_records_in_range(user_id, first, last)

    def get_latest_record(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_latest_for_user(int(user_id))

    def get_today_statistics(self) -> dict:
        today = self._clock().date()
        return {
            "totalRecords": self._attendance.count_for_date(today),
            "clockedInUsers": self._attendance.count_clocked_in_users(today),
            "date": today.isoformat(),
        }

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        """Records of one local calendar day, oldest first."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records with start <= timestamp < end, oldest first."""

        raise NotImplementedError

    def exists_between(self, user_id: int, punch_type: PunchType, since: datetime, until: datetime) -> bool:
        """Whether a punch of that type has since <= timestamp <= until."""

        raise NotImplementedError

    def get_latest_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        punch_type: PunchType,
        timestamp: datetime,
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> AttendanceRecord:
        """Insert a punch. Raises ConflictError when (user, day, type) already exists."""

        raise NotImplementedError

    def replace_with_correction(
        self,
        *,
        attendance_id: int,
        punch_type: PunchType,
        timestamp: datetime,
    ) -> AttendanceRecord:
        """Write the corrected version of a record (used only for approved corrections)."""

        raise NotImplementedError

    def count_for_date(self, work_date: date) -> int:
        raise NotImplementedError

    def count_clocked_in_users(self, work_date: date) -> int:
        raise NotImplementedError

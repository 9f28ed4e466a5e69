from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import SummaryType
from .model import AttendanceSummary, Holiday


class SummaryRepository(Protocol):
    def get_by_key(self, user_id: int, target_date: date, summary_type: SummaryType) -> Optional[AttendanceSummary]:
        raise NotImplementedError

    def upsert(self, summary: AttendanceSummary) -> AttendanceSummary:
        """Insert or replace the row identified by (user_id, target_date, summary_type)."""

        raise NotImplementedError

    def delete_by_key(self, user_id: int, target_date: date, summary_type: SummaryType) -> bool:
        """Drop the row if present; True when something was removed."""

        raise NotImplementedError

    def list_between(
        self,
        start_date: date,
        end_date: date,
        *,
        summary_type: Optional[SummaryType] = None,
    ) -> Sequence[AttendanceSummary]:
        raise NotImplementedError

    def list_for_user_between(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
        *,
        summary_type: Optional[SummaryType] = None,
    ) -> Sequence[AttendanceSummary]:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def find_on(self, day: date) -> Optional[Holiday]:
        """Holiday falling on `day` (recurring holidays match by month/day)."""

        raise NotImplementedError

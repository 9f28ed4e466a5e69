from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LocationType


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    The user directory is owned elsewhere; the core only reads it.
    """

    user_id: int
    full_name: str
    location_type: LocationType
    skip_location_check: bool = False
    dept_id: Optional[int] = None
    hire_date: Optional[date] = None
    created_at: Optional[datetime] = None

    @property
    def tenure_start(self) -> Optional[date]:
        """Hire date, falling back to the account creation day."""
        if self.hire_date is not None:
            return self.hire_date
        if self.created_at is not None:
            return self.created_at.date()
        return None

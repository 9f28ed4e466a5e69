from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .calculator import PaidLeaveCalculator


class PaidLeaveService:
    def __init__(
        self,
        users: UserRepository,
        *,
        calculator: Optional[PaidLeaveCalculator] = None,
        today: Callable[[], date] = lambda: now_local().date(),
    ):
        self._users = users
        self._calculator = calculator or PaidLeaveCalculator()
        self._today = today

    def get_paid_leave_days(self, user_id: int, as_of: Optional[date] = None) -> int:
        user = self._users.get_by_id(int(user_id))
        if user is None:
            raise NotFoundError(f"user not found: {user_id}")
        if user.tenure_start is None:
            raise ValidationError("hire date is not registered")
        return self._calculator.calculate_paid_leave_days(user, as_of or self._today())

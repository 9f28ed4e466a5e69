from __future__ import annotations

from datetime import date, datetime

import pytest

from src.geo_attendance.geo_attendance.core.enums import LocationType
from src.geo_attendance.geo_attendance.core.exceptions import NotFoundError, ValidationError
from src.geo_attendance.geo_attendance.leave.calculator import PaidLeaveCalculator, entitlement_days
from src.geo_attendance.geo_attendance.leave.service import PaidLeaveService
from src.geo_attendance.geo_attendance.users.model import User

from tests.fakes import FakeUsersRepo, make_user

HIRED = date(2020, 4, 1)


@pytest.mark.parametrize(
    "as_of, expected",
    [
        (date(2020, 7, 1), 0),
        (date(2021, 3, 31), 0),
        (date(2021, 4, 1), 10),
        (date(2022, 4, 1), 11),
        (date(2023, 4, 1), 12),
        (date(2024, 4, 1), 13),
        (date(2025, 4, 1), 14),
        (date(2026, 4, 1), 15),
        (date(2035, 1, 1), 15),
    ],
)
def test_entitlement_by_completed_years(as_of, expected):
    assert entitlement_days(HIRED, as_of) == expected


def test_future_hire_date_gives_zero():
    assert entitlement_days(date(2027, 1, 1), date(2026, 1, 1)) == 0


def test_missing_dates_raise_type_error():
    with pytest.raises(TypeError):
        entitlement_days(None, date(2026, 1, 1))
    with pytest.raises(TypeError):
        entitlement_days(HIRED, None)


def test_leap_day_hire_completes_year_on_march_first():
    assert entitlement_days(date(2024, 2, 29), date(2025, 2, 28)) == 0
    assert entitlement_days(date(2024, 2, 29), date(2025, 3, 1)) == 10


def test_calculator_falls_back_to_account_creation_date():
    user = User(
        user_id=5,
        full_name="No hire date",
        location_type=LocationType.OFFICE,
        created_at=datetime(2023, 6, 15, 9, 0),
    )
    assert PaidLeaveCalculator().calculate_paid_leave_days(user, date(2025, 6, 15)) == 11


def test_service_uses_today_by_default():
    service = PaidLeaveService(FakeUsersRepo(make_user(1, hire_date=HIRED)), today=lambda: date(2026, 1, 1))
    assert service.get_paid_leave_days(1) == 14
    assert service.get_paid_leave_days(1, date(2021, 5, 1)) == 10


def test_service_unknown_user_or_missing_hire_date():
    service = PaidLeaveService(FakeUsersRepo(make_user(2)))
    with pytest.raises(NotFoundError):
        service.get_paid_leave_days(1)
    with pytest.raises(ValidationError):
        service.get_paid_leave_days(2)

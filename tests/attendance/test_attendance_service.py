from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.geo_attendance.geo_attendance.attendance.model import PunchRequest
from src.geo_attendance.geo_attendance.attendance.service import AttendanceService
from src.geo_attendance.geo_attendance.core.enums import AttendanceState, PunchType, SummaryType
from src.geo_attendance.geo_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.geo_attendance.geo_attendance.locations.geo import GeoValidator
from src.geo_attendance.geo_attendance.summaries.service import SummaryService

from tests.fakes import OFFICE, FakeAttendanceRepo, FakeLocationsRepo, FakeSummaryRepo, FakeUsersRepo, at, make_user

LAT, LON = OFFICE.latitude, OFFICE.longitude


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _build(*users, clock=None, summaries=None):
    attendance = FakeAttendanceRepo()
    summary_repo = FakeSummaryRepo()
    if summaries is None:
        summaries = SummaryService(attendance, summary_repo)
    service = AttendanceService(
        attendance,
        FakeUsersRepo(*(users or (make_user(1),))),
        GeoValidator(FakeLocationsRepo(OFFICE)),
        summaries,
        clock=clock or Clock(at(2026, 3, 2, 9, 0)),
    )
    return service, attendance, summary_repo


def test_clock_in_records_punch_with_coordinates():
    service, attendance, _ = _build()

    record = service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))

    assert record.type == PunchType.IN
    assert record.timestamp == at(2026, 3, 2, 9, 0)
    assert (record.latitude, record.longitude) == (LAT, LON)
    assert list(attendance.records) == [record.attendance_id]


def test_clock_in_unknown_user_is_not_found():
    service, _, _ = _build()
    with pytest.raises(NotFoundError):
        service.clock_in(99, LAT, LON)


def test_clock_in_outside_geofence_is_rejected_and_nothing_stored():
    service, attendance, _ = _build()

    with pytest.raises(ValidationError, match="punch rejected"):
        service.clock_in(1, LAT + 0.01, LON)

    assert attendance.records == {}


def test_clock_in_without_location_is_rejected():
    service, _, _ = _build()
    with pytest.raises(ValidationError, match="location is required"):
        service.clock_in(1, None, LON)


def test_skip_location_user_can_clock_in_anywhere():
    service, _, _ = _build(make_user(1, skip_location_check=True))
    record = service.clock_in(1, 43.06, 141.35)
    assert record.type == PunchType.IN


def test_clock_in_twice_same_day_conflicts():
    service, _, _ = _build()
    service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))

    with pytest.raises(ConflictError, match="already clocked in"):
        service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 13, 0))


def test_clock_in_within_window_across_midnight_is_duplicate():
    service, attendance, _ = _build()
    attendance.add(1, PunchType.IN, at(2026, 3, 1, 23, 58))

    with pytest.raises(ConflictError, match="duplicate clock-in within 5 minutes"):
        service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 0, 1))


def test_later_dated_punch_is_not_a_duplicate():
    service, attendance, _ = _build()
    attendance.add(1, PunchType.IN, at(2026, 3, 3, 9, 0))

    record = service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))

    assert record.work_date == date(2026, 3, 2)


def test_clock_out_without_clock_in_conflicts():
    service, _, _ = _build()
    with pytest.raises(ConflictError, match="no clock-in"):
        service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 18, 0))


def test_clock_out_twice_conflicts():
    service, _, _ = _build()
    service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))
    service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 18, 0))

    with pytest.raises(ConflictError, match="already clocked out"):
        service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 18, 30))


def test_clock_out_within_window_across_midnight_is_duplicate():
    service, attendance, _ = _build()
    attendance.add(1, PunchType.IN, at(2026, 3, 1, 15, 0))
    attendance.add(1, PunchType.OUT, at(2026, 3, 1, 23, 58))
    attendance.add(1, PunchType.IN, at(2026, 3, 2, 0, 0))

    with pytest.raises(ConflictError, match="duplicate clock-out within 5 minutes"):
        service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 0, 2))


def test_clock_out_writes_daily_summary():
    service, _, summary_repo = _build()
    service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))
    service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 18, 0))

    summary = summary_repo.get_by_key(1, date(2026, 3, 2), SummaryType.DAILY)
    assert summary is not None
    assert summary.total_hours == Decimal("9.00")
    assert summary.overtime_hours == Decimal("1.00")


class ExplodingSummaries:
    def update_daily_summary(self, user_id, day):
        raise RuntimeError("summary store unavailable")


def test_summary_failure_does_not_undo_clock_out():
    service, attendance, _ = _build(summaries=ExplodingSummaries())
    service.clock_in(1, LAT, LON, now=at(2026, 3, 2, 9, 0))

    record = service.clock_out(1, LAT, LON, now=at(2026, 3, 2, 18, 0))

    assert attendance.get_by_id(record.attendance_id).type == PunchType.OUT


def test_current_status_follows_latest_punch_of_today():
    clock = Clock(at(2026, 3, 2, 8, 0))
    service, _, _ = _build(clock=clock)
    assert service.get_current_attendance_status(1) == AttendanceState.NONE

    clock.now = at(2026, 3, 2, 9, 0)
    service.clock_in(1, LAT, LON)
    assert service.get_current_attendance_status(1) == AttendanceState.IN

    clock.now = at(2026, 3, 2, 18, 0)
    service.clock_out(1, LAT, LON)
    assert service.get_current_attendance_status(1) == AttendanceState.OUT


def test_request_variant_reports_business_failure_without_raising():
    service, _, _ = _build()

    first = service.clock_in_request(PunchRequest(LAT, LON), 1)
    second = service.clock_in_request(PunchRequest(LAT, LON), 1)

    assert first.success is True
    assert first.status == AttendanceState.IN
    assert first.to_dict()["record"]["type"] == "in"
    assert second.success is False
    assert second.message == "already clocked in"
    assert second.record is None


class BrokenUsers:
    def get_by_id(self, user_id):
        raise RuntimeError("directory down")


def test_request_variant_lets_unexpected_errors_propagate():
    service = AttendanceService(FakeAttendanceRepo(), BrokenUsers(), GeoValidator(FakeLocationsRepo(OFFICE)))
    with pytest.raises(RuntimeError):
        service.clock_out_request(PunchRequest(LAT, LON), 1)


def test_records_in_range_rejects_inverted_range():
    service, _, _ = _build()
    with pytest.raises(ValidationError, match="start date must not be after end date"):
        service.get_records_in_range(1, date(2026, 3, 5), date(2026, 3, 1))


def test_monthly_records_and_today_statistics():
    service, attendance, _ = _build(make_user(1), make_user(2))
    attendance.add(1, PunchType.IN, at(2026, 2, 27, 9, 0))
    attendance.add(1, PunchType.IN, at(2026, 3, 2, 9, 0))
    attendance.add(2, PunchType.IN, at(2026, 3, 2, 9, 5))
    attendance.add(2, PunchType.OUT, at(2026, 3, 2, 17, 0))

    march = service.get_monthly_records(1, 2026, 3)
    assert [r.timestamp for r in march] == [at(2026, 3, 2, 9, 0)]
    assert service.get_latest_record(2).type == PunchType.OUT
    assert service.get_today_statistics() == {"totalRecords": 3, "clockedInUsers": 2, "date": "2026-03-02"}

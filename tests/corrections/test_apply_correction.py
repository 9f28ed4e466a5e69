from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.geo_attendance.geo_attendance.attendance.service import AttendanceService
from src.geo_attendance.geo_attendance.core.enums import DailyStatus, PunchType, SummaryType
from src.geo_attendance.geo_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.geo_attendance.geo_attendance.corrections.model import NewTimeCorrection
from src.geo_attendance.geo_attendance.corrections.service import TimeCorrectionService
from src.geo_attendance.geo_attendance.locations.geo import GeoValidator
from src.geo_attendance.geo_attendance.summaries.service import SummaryService

from tests.fakes import (
    OFFICE,
    FakeAttendanceRepo,
    FakeCorrectionsRepo,
    FakeLocationsRepo,
    FakeSummaryRepo,
    FakeUsersRepo,
    RecordingNotifier,
    at,
    fixed_clock,
    make_user,
)


@pytest.fixture()
def world():
    attendance = FakeAttendanceRepo()
    summaries = FakeSummaryRepo()
    users = FakeUsersRepo(make_user(1), make_user(9))
    clock = fixed_clock(at(2026, 3, 3, 10, 0))
    recorder = AttendanceService(
        attendance,
        users,
        GeoValidator(FakeLocationsRepo(OFFICE)),
        SummaryService(attendance, summaries),
        clock=clock,
    )
    workflow = TimeCorrectionService(
        FakeCorrectionsRepo(), attendance, users, notifier=RecordingNotifier(), clock=clock
    )
    clock_in = attendance.add(1, PunchType.IN, at(2026, 3, 2, 9, 30))
    clock_out = attendance.add(1, PunchType.OUT, at(2026, 3, 2, 18, 0))
    return recorder, workflow, attendance, summaries, clock_in, clock_out


def test_pending_correction_cannot_be_applied(world):
    recorder, workflow, _, _, clock_in, _ = world
    correction = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "late badge", requested_time=at(2026, 3, 2, 9, 0)), 1
    )

    with pytest.raises(ConflictError):
        recorder.apply_correction(correction)


def test_approved_time_correction_rewrites_record_and_summary(world):
    recorder, workflow, attendance, summaries, clock_in, _ = world
    correction = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "late badge", requested_time=at(2026, 3, 2, 9, 0)), 1
    )
    approved = workflow.approve(correction.correction_id, 9)

    updated = recorder.apply_correction(approved)

    assert updated.timestamp == at(2026, 3, 2, 9, 0)
    assert updated.type == PunchType.IN
    assert (updated.latitude, updated.longitude) == (clock_in.latitude, clock_in.longitude)
    assert attendance.get_by_id(clock_in.attendance_id).timestamp == at(2026, 3, 2, 9, 0)

    daily = summaries.get_by_key(1, date(2026, 3, 2), SummaryType.DAILY)
    assert daily.total_hours == Decimal("9.00")
    assert daily.overtime_hours == Decimal("1.00")


def test_type_change_that_duplicates_the_day_conflicts(world):
    recorder, workflow, _, _, clock_in, _ = world
    correction = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "type", "wrong button", requested_type="out"), 1
    )
    approved = workflow.approve(correction.correction_id, 9)

    with pytest.raises(ConflictError, match="already exists"):
        recorder.apply_correction(approved)


def test_clock_out_moved_before_clock_in_is_rejected(world):
    recorder, workflow, _, _, _, clock_out = world
    correction = workflow.create(
        NewTimeCorrection(clock_out.attendance_id, "time", "typo", requested_time=at(2026, 3, 2, 8, 0)), 1
    )
    approved = workflow.approve(correction.correction_id, 9)

    with pytest.raises(ValidationError, match="earlier than clock-in"):
        recorder.apply_correction(approved)


def test_missing_record_is_not_found(world):
    recorder, workflow, attendance, _, clock_in, _ = world
    correction = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "late badge", requested_time=at(2026, 3, 2, 9, 0)), 1
    )
    approved = workflow.approve(correction.correction_id, 9)
    del attendance.records[clock_in.attendance_id]

    with pytest.raises(NotFoundError):
        recorder.apply_correction(approved)


def test_moving_clock_out_to_next_day_drops_the_old_daily_row(world):
    recorder, workflow, attendance, summaries, _, clock_out = world
    summary_service = SummaryService(attendance, summaries)
    summary_service.update_daily_summary(1, date(2026, 3, 2))
    assert summaries.get_by_key(1, date(2026, 3, 2), SummaryType.DAILY).total_hours == Decimal("9.00")

    correction = workflow.create(
        NewTimeCorrection(clock_out.attendance_id, "time", "left after midnight", requested_time=at(2026, 3, 3, 1, 0)), 1
    )
    recorder.apply_correction(workflow.approve(correction.correction_id, 9))

    assert summary_service.get_daily_summary(1, date(2026, 3, 2)).status == DailyStatus.IN_PROGRESS
    assert summaries.get_by_key(1, date(2026, 3, 2), SummaryType.DAILY) is None
    assert summaries.get_by_key(1, date(2026, 3, 3), SummaryType.DAILY) is None
    assert summary_service.get_summary_statistics(date(2026, 3, 1), date(2026, 3, 31)).total_hours == Decimal("0.00")


def test_applied_correction_cannot_be_applied_again(world):
    recorder, workflow, _, _, clock_in, _ = world
    correction = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "late badge", requested_time=at(2026, 3, 2, 9, 0)), 1
    )
    approved = workflow.approve(correction.correction_id, 9)
    recorder.apply_correction(approved)

    with pytest.raises(ConflictError, match="changed since"):
        recorder.apply_correction(approved)


def test_older_correction_does_not_overwrite_a_newer_one(world):
    recorder, workflow, attendance, _, clock_in, _ = world
    older = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "late badge", requested_time=at(2026, 3, 2, 9, 0)), 1
    )
    newer = workflow.create(
        NewTimeCorrection(clock_in.attendance_id, "time", "actually earlier", requested_time=at(2026, 3, 2, 8, 45)), 1
    )
    older = workflow.approve(older.correction_id, 9)
    recorder.apply_correction(workflow.approve(newer.correction_id, 9))

    with pytest.raises(ConflictError):
        recorder.apply_correction(older)
    assert attendance.get_by_id(clock_in.attendance_id).timestamp == at(2026, 3, 2, 8, 45)

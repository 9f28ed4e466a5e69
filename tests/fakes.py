"""In-memory stand-ins for the repository Protocols (no DB needed)."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from src.geo_attendance.geo_attendance.attendance.model import AttendanceRecord
from src.geo_attendance.geo_attendance.common.datetime_utils import to_local
from src.geo_attendance.geo_attendance.core.enums import LocationType, PunchType, RequestStatus
from src.geo_attendance.geo_attendance.core.exceptions import ConflictError
from src.geo_attendance.geo_attendance.corrections.model import TimeCorrection
from src.geo_attendance.geo_attendance.locations.model import WorkLocation
from src.geo_attendance.geo_attendance.summaries.model import AttendanceSummary
from src.geo_attendance.geo_attendance.users.model import User

TOKYO = ZoneInfo("Asia/Tokyo")

OFFICE = WorkLocation(
    location_id=1,
    name="Head office",
    type=LocationType.OFFICE,
    latitude=35.681236,
    longitude=139.767125,
    radius_meters=100,
)
CLIENT_SITE = WorkLocation(
    location_id=2,
    name="Client site A",
    type=LocationType.CLIENT,
    latitude=35.658034,
    longitude=139.751599,
    radius_meters=500,
)


def at(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=TOKYO)


def fixed_clock(value: datetime):
    return lambda: value


def make_user(user_id=1, *, location_type=LocationType.OFFICE, skip_location_check=False, dept_id=None, hire_date=None):
    return User(
        user_id=user_id,
        full_name=f"User {user_id}",
        location_type=location_type,
        skip_location_check=skip_location_check,
        dept_id=dept_id,
        hire_date=hire_date,
    )


class FakeUsersRepo:
    def __init__(self, *users: User):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))


class FakeDepartmentsRepo:
    def __init__(self, members: Optional[dict] = None):
        self._members = members or {}

    def list_member_ids(self, dept_id):
        return list(self._members.get(int(dept_id), []))


class FakeLocationsRepo:
    def __init__(self, *locations: WorkLocation):
        self._locations = list(locations)
        self.calls = 0

    def list_active_by_type(self, location_type):
        self.calls += 1
        return [loc for loc in self._locations if loc.type == location_type and loc.is_active]


class FakeAttendanceRepo:
    def __init__(self):
        self._next_id = 1
        self.records: dict[int, AttendanceRecord] = {}

    def add(self, user_id, punch_type, timestamp, latitude=None, longitude=None) -> AttendanceRecord:
        return self.create(
            user_id=user_id,
            punch_type=punch_type,
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
        )

    def get_by_id(self, attendance_id):
        return self.records.get(int(attendance_id))

    def list_for_user_and_date(self, user_id, work_date):
        rows = [r for r in self.records.values() if r.user_id == int(user_id) and r.work_date == work_date]
        return sorted(rows, key=lambda r: r.timestamp)

    def list_for_user_between(self, user_id, start, end):
        rows = [r for r in self.records.values() if r.user_id == int(user_id) and start <= r.timestamp < end]
        return sorted(rows, key=lambda r: r.timestamp)

    def exists_between(self, user_id, punch_type, since, until):
        return any(
            r.user_id == int(user_id) and r.type == punch_type and since <= r.timestamp <= until
            for r in self.records.values()
        )

    def get_latest_for_user(self, user_id):
        rows = [r for r in self.records.values() if r.user_id == int(user_id)]
        return max(rows, key=lambda r: r.timestamp) if rows else None

    def create(self, *, user_id, punch_type, timestamp, latitude, longitude):
        day = to_local(timestamp).date()
        if any(r.user_id == user_id and r.type == punch_type and r.work_date == day for r in self.records.values()):
            raise ConflictError(f"already clocked {punch_type.value} today")

        record = AttendanceRecord(
            attendance_id=self._next_id,
            user_id=user_id,
            type=punch_type,
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
        )
        self.records[record.attendance_id] = record
        self._next_id += 1
        return record

    def replace_with_correction(self, *, attendance_id, punch_type, timestamp):
        updated = replace(self.records[int(attendance_id)], type=punch_type, timestamp=timestamp)
        self.records[updated.attendance_id] = updated
        return updated

    def count_for_date(self, work_date):
        return sum(1 for r in self.records.values() if r.work_date == work_date)

    def count_clocked_in_users(self, work_date):
        return len({r.user_id for r in self.records.values() if r.work_date == work_date and r.type == PunchType.IN})


class FakeSummaryRepo:
    def __init__(self, *rows: AttendanceSummary):
        self._next_id = 1
        self.rows: dict[tuple, AttendanceSummary] = {}
        self.calls = 0
        for row in rows:
            self.upsert(row)
        self.calls = 0

    def get_by_key(self, user_id, target_date, summary_type):
        self.calls += 1
        return self.rows.get((int(user_id), target_date, summary_type))

    def upsert(self, summary):
        self.calls += 1
        key = (summary.user_id, summary.target_date, summary.summary_type)
        existing = self.rows.get(key)
        summary_id = existing.summary_id if existing else self._next_id
        if existing is None:
            self._next_id += 1
        stored = replace(summary, summary_id=summary_id)
        self.rows[key] = stored
        return stored

    def delete_by_key(self, user_id, target_date, summary_type):
        self.calls += 1
        return self.rows.pop((int(user_id), target_date, summary_type), None) is not None

    def list_between(self, start_date, end_date, *, summary_type=None):
        self.calls += 1
        return [
            s for s in self.rows.values()
            if start_date <= s.target_date <= end_date and (summary_type is None or s.summary_type == summary_type)
        ]

    def list_for_user_between(self, user_id, start_date, end_date, *, summary_type=None):
        return [s for s in self.list_between(start_date, end_date, summary_type=summary_type) if s.user_id == int(user_id)]


class FakeHolidaysRepo:
    def __init__(self, *holidays):
        self._holidays = list(holidays)

    def find_on(self, day: date):
        return next((h for h in self._holidays if h.matches(day)), None)


class FakeCorrectionsRepo:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, TimeCorrection] = {}

    def create(self, *, user_id, attendance_id, request_type, before_time, current_type, requested_time, requested_type, reason, created_at):
        correction = TimeCorrection(
            correction_id=self._next_id,
            user_id=user_id,
            attendance_id=attendance_id,
            request_type=request_type,
            before_time=before_time,
            current_type=current_type,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
            requested_time=requested_time,
            requested_type=requested_type,
        )
        self.items[correction.correction_id] = correction
        self._next_id += 1
        return correction

    def get_by_id(self, correction_id):
        return self.items.get(int(correction_id))

    def decide(self, *, correction_id, status, approver_id, decided_at):
        current = self.items.get(int(correction_id))
        if current is None or current.status != RequestStatus.PENDING:
            return False
        self.items[current.correction_id] = replace(
            current, status=status, approver_id=approver_id, approved_at=decided_at
        )
        return True

    def list_for_user(self, user_id, *, limit=200):
        rows = [c for c in self.items.values() if c.user_id == int(user_id)]
        return sorted(rows, key=lambda c: c.created_at, reverse=True)[:limit]

    def list_by_status(self, status, *, limit=200):
        rows = [c for c in self.items.values() if c.status == status]
        return sorted(rows, key=lambda c: c.created_at)[:limit]

    def count_by_status(self, status, *, user_id=None):
        return sum(
            1 for c in self.items.values()
            if c.status == status and (user_id is None or c.user_id == int(user_id))
        )


class RecordingNotifier:
    def __init__(self):
        self.created = []
        self.decided = []

    def correction_created(self, correction):
        self.created.append(correction)

    def correction_decided(self, correction):
        self.decided.append(correction)

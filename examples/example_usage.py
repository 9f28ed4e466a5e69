"""Ví dụ: dùng service layer (không qua Flask).

Chấm công vào/ra cho user demo rồi in tổng kết ngày và số ngày phép.
"""

import importlib

from config import get_settings_module

from src.geo_attendance.geo_attendance.attendance.model import PunchRequest
from src.geo_attendance.geo_attendance.container import build_container

HEAD_OFFICE = PunchRequest(latitude=35.681236, longitude=139.767125)


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    attendance = container.attendance_service

    print(attendance.clock_in_request(HEAD_OFFICE, user_id=2).to_dict())
    print(attendance.clock_out_request(HEAD_OFFICE, user_id=2).to_dict())

    today = attendance.get_today_records(2)
    if today:
        print(container.summary_service.get_daily_summary(2, today[0].work_date).to_dict())
    print("paid leave days:", container.paid_leave_service.get_paid_leave_days(2))


if __name__ == "__main__":
    main()

from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, json_body, login_required
from ..container import Container
from .model import PunchResponse


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def clock_in():
        data = json_body()
        user_id = current_user_id()
        record = service.clock_in(user_id, data.get("latitude"), data.get("longitude"))
        response = PunchResponse(
            success=True,
            message="clock-in completed",
            record=record,
            status=service.get_current_attendance_status(user_id),
        )
        return jsonify(response.to_dict()), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def clock_out():
        data = json_body()
        user_id = current_user_id()
        record = service.clock_out(user_id, data.get("latitude"), data.get("longitude"))
        response = PunchResponse(
            success=True,
            message="clock-out completed",
            record=record,
            status=service.get_current_attendance_status(user_id),
        )
        return jsonify(response.to_dict()), 201

    @app.route("/api/attendance/status", methods=["GET"], endpoint="api_attendance_status")
    @login_required
    def status():
        user_id = current_user_id()
        records = service.get_today_records(user_id)
        return jsonify(
            {
                "success": True,
                "status": service.get_current_attendance_status(user_id).value,
                "records": [r.to_dict() for r in records],
            }
        )

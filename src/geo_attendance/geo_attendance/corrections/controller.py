from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_datetime
from ..common.web import current_user_id, json_body, login_required
from ..container import Container
from ..core.exceptions import NotFoundError
from .model import CorrectionResult, NewTimeCorrection


def register(app: Flask, container: Container) -> None:
    service = container.correction_service

    def _parse_request(data: dict) -> NewTimeCorrection:
        raw_time = data.get("requestedTime")
        return NewTimeCorrection(
            attendance_id=data.get("attendanceId"),
            request_type=data.get("requestType"),
            reason=data.get("reason"),
            current_type=data.get("currentType"),
            requested_time=parse_iso_datetime(raw_time) if raw_time else None,
            requested_type=data.get("requestedType"),
        )

    @app.route("/api/time-corrections", methods=["POST"], endpoint="api_create_time_correction")
    @login_required
    def create():
        correction = service.create(_parse_request(json_body()), current_user_id())
        result = CorrectionResult(success=True, message="correction request submitted", correction=correction)
        return jsonify(result.to_dict()), 201

    @app.route("/api/time-corrections/<int:correction_id>/approve", methods=["POST"], endpoint="api_approve_time_correction")
    @login_required
    def approve(correction_id: int):
        correction = service.approve(correction_id, current_user_id())
        result = CorrectionResult(success=True, message="correction request approved", correction=correction)
        return jsonify(result.to_dict())

    @app.route("/api/time-corrections/<int:correction_id>/reject", methods=["POST"], endpoint="api_reject_time_correction")
    @login_required
    def reject(correction_id: int):
        correction = service.reject(correction_id, current_user_id())
        result = CorrectionResult(success=True, message="correction request rejected", correction=correction)
        return jsonify(result.to_dict())

    @app.route("/api/time-corrections/<int:correction_id>/apply", methods=["POST"], endpoint="api_apply_time_correction")
    @login_required
    def apply(correction_id: int):
        correction = service.get_by_id(correction_id)
        if correction is None:
            raise NotFoundError("correction not found")
        record = container.attendance_service.apply_correction(correction)
        return jsonify({"success": True, "message": "correction applied", "record": record.to_dict()})

    @app.route("/api/time-corrections/me", methods=["GET"], endpoint="api_my_time_corrections")
    @login_required
    def mine():
        user_id = current_user_id()
        return jsonify(
            {
                "success": True,
                "data": [c.to_dict() for c in service.list_for_user(user_id)],
                "pendingCount": service.count_pending_for_user(user_id),
            }
        )

    @app.route("/api/time-corrections/pending", methods=["GET"], endpoint="api_pending_time_corrections")
    @login_required
    def pending():
        return jsonify(
            {
                "success": True,
                "data": [c.to_dict() for c in service.list_pending()],
                "count": service.count_pending(),
            }
        )

from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import month_bounds, now_local
from ..common.web import current_user_id, json_body, login_required, query_date
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.summary_service

    def _range():
        today = now_local().date()
        first, _ = month_bounds(today.year, today.month)
        return query_date("startDate", first), query_date("endDate", today)

    @app.route("/api/summaries/daily", methods=["GET"], endpoint="api_daily_summary")
    @login_required
    def daily():
        day = query_date("date", now_local().date())
        data = service.get_daily_summary(current_user_id(), day)
        return jsonify({"success": True, "data": data.to_dict()})

    @app.route("/api/summaries/statistics", methods=["GET"], endpoint="api_summary_statistics")
    @login_required
    def statistics():
        start, end = _range()
        totals = service.get_summary_statistics(start, end)
        return jsonify({"success": True, "data": totals.to_dict()})

    @app.route("/api/summaries/personal", methods=["GET"], endpoint="api_personal_statistics")
    @login_required
    def personal():
        start, end = _range()
        stats = service.get_personal_statistics(current_user_id(), start, end)
        return jsonify({"success": True, "data": stats.to_dict()})

    @app.route("/api/summaries/department/<int:dept_id>", methods=["GET"], endpoint="api_department_statistics")
    @login_required
    def department(dept_id: int):
        start, end = _range()
        stats = service.get_department_statistics(dept_id, start, end)
        return jsonify({"success": True, "data": stats.to_dict()})

    @app.route("/api/summaries/monthly", methods=["POST"], endpoint="api_generate_monthly_summary")
    @login_required
    def generate_monthly():
        data = json_body()
        try:
            year = int(data.get("year"))
            month = int(data.get("month"))
        except (TypeError, ValueError):
            raise ValidationError("year and month are required")

        summary = service.generate_monthly_summary(current_user_id(), year, month)
        if summary is None:
            return jsonify({"success": True, "message": "no daily summaries for this month", "data": None})
        return jsonify({"success": True, "data": summary.to_dict()})

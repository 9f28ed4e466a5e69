from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, login_required, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/paid-leave/days", methods=["GET"], endpoint="api_paid_leave_days")
    @login_required
    def paid_leave_days():
        user_id = current_user_id()
        as_of = query_date("asOf")
        days = container.paid_leave_service.get_paid_leave_days(user_id, as_of)
        return jsonify({"success": True, "userId": user_id, "paidLeaveDays": days})

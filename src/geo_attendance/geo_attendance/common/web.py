from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from .datetime_utils import parse_iso_date


def login_required(view):
    """JSON variant: the session is established by the external login layer."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def query_date(name: str, default: Optional[date] = None) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return default
    return parse_iso_date(raw)

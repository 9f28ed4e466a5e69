from __future__ import annotations

import importlib
import logging
from datetime import time
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import configure_timezone
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE, DUPLICATE_PUNCH_WINDOW_MINUTES, LATE_NIGHT_END, LATE_NIGHT_START
from .core.exceptions import DomainError
from .corrections.controller import register as register_corrections
from .database.bootstrap import apply_schema, apply_sql_file, list_tables
from .leave.controller import register as register_leave
from .summaries.controller import register as register_summaries

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _as_time(value, default: time) -> time:
    if value is None:
        return default
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        logger.warning("request rejected (%s): %s", type(e).__name__, e)
        return jsonify({"success": False, "message": str(e)}), e.http_status

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("unhandled error")
        return jsonify({"success": False, "message": "system error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    configure_timezone(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_sql_file(db_config, path=_DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            standard_hours=Decimal(str(getattr(settings, "STANDARD_WORK_HOURS", "8"))),
            duplicate_window_minutes=int(
                getattr(settings, "DUPLICATE_PUNCH_WINDOW_MINUTES", DUPLICATE_PUNCH_WINDOW_MINUTES)
            ),
            late_night_start=_as_time(getattr(settings, "LATE_NIGHT_START", None), LATE_NIGHT_START),
            late_night_end=_as_time(getattr(settings, "LATE_NIGHT_END", None), LATE_NIGHT_END),
        )

    _register_error_handlers(app)

    register_attendance(app, container)
    register_summaries(app, container)
    register_corrections(app, container)
    register_leave(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, url_for

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.directory import CLASS_DIRECTORY, resolve_class_label
from .common.datetime_utils import human_date
from .container import Container, build_container
from .core.enums import AttendanceStatus
from .core.exceptions import StoreError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .imports.controller import register as register_imports
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"), static_folder=str(REPO_ROOT / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection(DBConfig.from_dict(db_config))
            apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))

        container = build_container(
            db_config=db_config,
            import_chunk_size=int(getattr(settings, "IMPORT_CHUNK_SIZE", 50)),
            import_throttle_seconds=float(getattr(settings, "IMPORT_THROTTLE_SECONDS", 0.15)),
        )

    app.extensions["container"] = container
    app.jinja_env.filters["class_label"] = resolve_class_label
    app.jinja_env.filters["human_date"] = human_date
    app.jinja_env.globals["classes"] = CLASS_DIRECTORY
    app.jinja_env.globals["statuses"] = list(AttendanceStatus)

    register_teachers(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_imports(app, container)
    register_reports(app, container)

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        logger.exception("Unhandled backend failure")
        flash("Something went wrong talking to the database. Please try again.", "danger")
        return redirect(url_for("landing"))

    return app

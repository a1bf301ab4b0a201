"""Helpers shared by the Flask controllers."""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, redirect, request, session, url_for

from ..classes.directory import CLASS_DIRECTORY, is_known_class
from ..common.datetime_utils import normalize_iso_date, today_iso
from ..core.exceptions import LoadError, ValidationError


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "teacher_id" not in session:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("auth"))
        return view(*args, **kwargs)

    return wrapper


def current_teacher_id() -> int:
    return int(session["teacher_id"])


def selected_class(arg: str = "class") -> str:
    value = request.values.get(arg)
    return value if is_known_class(value) else CLASS_DIRECTORY[0].id


def selected_date(arg: str = "date", *, default: Optional[str] = None) -> Optional[str]:
    """ISO date from the query/form; flashes and falls back on bad input."""
    raw = request.values.get(arg)
    try:
        return normalize_iso_date(raw) or default
    except ValueError:
        flash(f"Ignoring invalid date: {raw}", "warning")
        return default


def selected_day() -> str:
    return selected_date("date", default=today_iso())


def posted_day() -> str:
    """Date a write applies to: today when omitted, rejected when malformed."""
    raw = request.values.get("date")
    try:
        return normalize_iso_date(raw) or today_iso()
    except ValueError:
        raise ValidationError(f"Invalid date: {raw}")


def safe_next(default: str) -> str:
    target = request.form.get("next") or ""
    if target.startswith("/") and not target.startswith("//"):
        return target
    return default


def refresh_caches(container) -> None:
    """Re-fetch roster and attendance; on failure keep what we have and tell the user."""
    for loader in (container.roster_service.refresh, container.attendance_book.refresh):
        try:
            loader()
        except LoadError as e:
            flash(str(e), "warning")

from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.web import login_required, posted_day, refresh_caches, safe_next, selected_class
from ..container import Container
from ..core.exceptions import ValidationError, WriteError
from ..reports.export import XLSX_MIMETYPE, history_workbook
from .service import history_dates


def register(app: Flask, container: Container) -> None:
    book = container.attendance_book
    roster = container.roster_service

    def _history(class_id: str, query: str):
        refresh_caches(container)
        rows = book.history_rows(roster.students_in_class(class_id, query))
        return rows, history_dates(rows)

    @app.route("/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        student_id = request.form.get("student_id", "")
        student = roster.get(student_id)
        class_id = request.form.get("class_id") or (student.class_id if student else "")
        day = None
        try:
            day = posted_day()
            book.mark(student_id=student_id, class_id=class_id, on=day, status=request.form.get("status", ""))
        except (ValidationError, WriteError) as e:
            flash(str(e), "danger")
        return redirect(safe_next(url_for("dashboard", **{"class": class_id, "date": day})))

    @app.route("/attendance/clear", methods=["POST"], endpoint="clear_attendance")
    @login_required
    def clear_attendance():
        student_id = request.form.get("student_id", "")
        student = roster.get(student_id)
        class_id = request.form.get("class_id") or (student.class_id if student else "")
        day = None
        try:
            day = posted_day()
            book.clear(student_id=student_id, on=day)
        except (ValidationError, WriteError) as e:
            flash(str(e), "danger")
        return redirect(safe_next(url_for("dashboard", **{"class": class_id, "date": day})))

    @app.route("/history", endpoint="history")
    @login_required
    def history():
        class_id = selected_class()
        query = request.args.get("q", "")
        rows, dates = _history(class_id, query)
        return render_template(
            "history.html",
            class_id=class_id,
            query=query,
            rows=rows,
            dates=dates,
            active_page="history",
        )

    @app.route("/history/print", endpoint="history_print")
    @login_required
    def history_print():
        class_id = selected_class()
        rows, dates = _history(class_id, request.args.get("q", ""))
        return render_template("print_history.html", class_id=class_id, rows=rows, dates=dates)

    @app.route("/history.xlsx", endpoint="history_xlsx")
    @login_required
    def history_xlsx():
        class_id = selected_class()
        rows, dates = _history(class_id, request.args.get("q", ""))
        if not rows or not dates:
            flash("Nothing to export for this class yet.", "info")
            return redirect(url_for("history", **{"class": class_id}))
        return send_file(
            history_workbook(rows, dates, class_id),
            download_name=f"history-{class_id}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

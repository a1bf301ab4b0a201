from __future__ import annotations

from flask import Flask, flash, redirect, render_template, send_file, url_for

from ..common.web import login_required, refresh_caches, selected_class, selected_date
from ..container import Container
from .builder import build_class_report
from .export import XLSX_MIMETYPE, absences_workbook


def register(app: Flask, container: Container) -> None:
    def _report():
        refresh_caches(container)
        class_id = selected_class()
        start = selected_date("start")
        end = selected_date("end")
        if start and end and start > end:
            flash("The start date is after the end date; showing nothing in between.", "warning")
        return build_class_report(
            container.roster_service.students,
            container.attendance_book.current,
            class_id,
            start=start,
            end=end,
        )

    @app.route("/reports", endpoint="reports")
    @login_required
    def reports():
        return render_template("report.html", report=_report(), active_page="reports")

    @app.route("/reports/print", endpoint="report_print")
    @login_required
    def report_print():
        return render_template("print_report.html", report=_report())

    @app.route("/reports/absent.xlsx", endpoint="report_absent_xlsx")
    @login_required
    def report_absent_xlsx():
        report = _report()
        if not report.absent_details:
            flash("No absences to export.", "info")
            return redirect(url_for("reports", **{"class": report.class_id}))
        return send_file(
            absences_workbook(report),
            download_name=f"absent-{report.class_id}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

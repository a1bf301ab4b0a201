from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.web import login_required, refresh_caches, safe_next, selected_class, selected_day
from ..container import Container
from ..core.exceptions import ValidationError, WriteError
from ..reports.export import XLSX_MIMETYPE, roster_workbook
from .model import StudentDraft


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/app", endpoint="dashboard")
    @login_required
    def dashboard():
        refresh_caches(container)

        class_id = selected_class()
        day = selected_day()
        query = request.args.get("q", "")
        search = request.args.get("search", "")

        edit_draft = None
        if request.args.get("new"):
            edit_draft = StudentDraft(id=None, name="", class_id=class_id, roll_number=roster.next_roll_number())
        elif request.args.get("edit"):
            student = roster.get(request.args["edit"])
            if student:
                edit_draft = StudentDraft(
                    id=student.id,
                    name=student.name,
                    class_id=student.class_id,
                    roll_number=student.roll_number,
                    age=student.age,
                    phone=student.phone,
                    alt_phone=student.alt_phone,
                )

        return render_template(
            "dashboard.html",
            class_id=class_id,
            day=day,
            query=query,
            search=search,
            students=roster.students_in_class(class_id, query),
            search_hits=roster.search(search),
            attendance=container.attendance_book.current,
            edit_draft=edit_draft,
            active_page="classes",
        )

    @app.route("/students/save", methods=["POST"], endpoint="save_student")
    @login_required
    def save_student():
        draft = StudentDraft(
            id=request.form.get("id") or None,
            name=request.form.get("name", ""),
            class_id=request.form.get("class_id", ""),
            roll_number=request.form.get("roll_number"),
            age=request.form.get("age"),
            phone=request.form.get("phone"),
            alt_phone=request.form.get("alt_phone"),
        )
        try:
            student = roster.save(draft)
            flash("Student details saved.", "success")
            return redirect(url_for("dashboard", **{"class": student.class_id}))
        except (ValidationError, WriteError) as e:
            flash(str(e), "danger")

        params = {"class": draft.class_id}
        params["edit" if draft.id else "new"] = draft.id or 1
        return redirect(url_for("dashboard", **params))

    @app.route("/students/<student_id>/delete", methods=["POST"], endpoint="delete_student")
    @login_required
    def delete_student(student_id: str):
        try:
            roster.delete(student_id)
            flash("Student removed from roster.", "success")
        except WriteError as e:
            flash(str(e), "danger")
        return redirect(safe_next(url_for("dashboard")))

    @app.route("/roster.xlsx", endpoint="roster_xlsx")
    @login_required
    def roster_xlsx():
        refresh_caches(container)
        class_id = selected_class()
        students = roster.students_in_class(class_id)
        output = roster_workbook(students, class_id)
        return send_file(
            output,
            download_name=f"roster-{class_id}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

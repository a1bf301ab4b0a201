from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_teacher_id, login_required
from ..container import Container
from ..core.exceptions import ImportParseError, ValidationError


def register(app: Flask, container: Container) -> None:
    imports = container.import_service

    @app.route("/upload", methods=["GET"], endpoint="upload")
    @login_required
    def upload():
        return render_template(
            "upload.html",
            preview=imports.preview(current_teacher_id()),
            pinned_class=request.args.get("class", ""),
            active_page="upload",
        )

    @app.route("/upload", methods=["POST"], endpoint="upload_file")
    @login_required
    def upload_file():
        file = request.files.get("file")
        pinned_class = request.form.get("class_id") or None
        if not file or not file.filename:
            flash("Choose an Excel file to upload.", "warning")
            return redirect(url_for("upload"))

        try:
            rows = imports.upload(current_teacher_id(), file.stream, file.filename, pinned_class_id=pinned_class)
            flash(f"Parsed {len(rows)} rows. Review them before saving.", "info")
        except (ImportParseError, ValidationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("upload", **{"class": pinned_class or ""}))

    @app.route("/upload/commit", methods=["POST"], endpoint="commit_upload")
    @login_required
    def commit_upload():
        result = imports.commit(current_teacher_id())
        if result.total == 0:
            flash("Nothing to save.", "info")
        elif not result.failures:
            flash(f"Student list saved ({result.success_count} students).", "success")
        else:
            details = "; ".join(f"row {f.row_number}: {f.message}" for f in result.failures[:10])
            more = "" if result.failed_count <= 10 else f" (+{result.failed_count - 10} more)"
            flash(
                f"Saved {result.success_count} of {result.total}. {result.failed_count} rows failed: {details}{more}",
                "warning",
            )
        return redirect(url_for("upload"))

    @app.route("/upload/discard", methods=["POST"], endpoint="discard_upload")
    @login_required
    def discard_upload():
        imports.discard(current_teacher_id())
        return redirect(url_for("upload"))

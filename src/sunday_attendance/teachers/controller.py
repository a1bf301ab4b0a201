from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="landing")
    def landing():
        return render_template("landing.html", signed_in="teacher_id" in session)

    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if "teacher_id" in session:
            return redirect(url_for("dashboard"))

        mode = request.values.get("mode", "signin")
        if mode not in {"signin", "signup"}:
            mode = "signin"

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                if mode == "signin":
                    teacher = container.auth_service.sign_in(email, password)
                else:
                    teacher = container.auth_service.sign_up(email, password)

                session.clear()
                session["teacher_id"] = teacher.teacher_id
                session["email"] = teacher.email
                return redirect(url_for("dashboard"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except StoreError:
                logger.exception("Sign-in backend failure")
                flash("The sign-in service is unavailable. Please try again.", "danger")

        return render_template("auth.html", mode=mode, email=request.form.get("email", ""))

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("landing"))

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import SessionTeacher
from .repository import TeacherRepository


def _normalize_email(email: str) -> str:
    email = require_non_empty(email, "Email").lower()
    if "@" not in email:
        raise ValidationError("Please enter a valid email address")
    return email


class AuthService:
    """Use case: email/password sign-in and sign-up for teachers."""

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def sign_in(self, email: str, password: str) -> SessionTeacher:
        teacher = self._teachers.get_by_email((email or "").strip().lower())
        if not teacher:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(teacher.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid login credentials")
        return SessionTeacher(teacher_id=teacher.teacher_id, email=teacher.email)

    def sign_up(self, email: str, password: str) -> SessionTeacher:
        email = _normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._teachers.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        teacher_id = self._teachers.create(email=email, password_hash=generate_password_hash(password))
        return SessionTeacher(teacher_id=teacher_id, email=email)

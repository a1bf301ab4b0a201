from __future__ import annotations

import logging
import unicodedata
import uuid
from typing import Iterable, Optional, Sequence

from ..attendance.service import AttendanceBook
from ..classes.directory import is_known_class
from ..common.validators import optional_int, optional_text, require_non_empty
from ..core.constants import MIN_GLOBAL_SEARCH_LENGTH
from ..core.exceptions import LoadError, StoreError, ValidationError, WriteError
from .model import Student, StudentDraft
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


class RosterService:
    """Use case: keep the roster cache and apply roster edits."""

    def __init__(self, students: StudentRepository, attendance_book: AttendanceBook):
        self._students = students
        self._attendance_book = attendance_book
        self._roster: list[Student] = []

    @property
    def students(self) -> Sequence[Student]:
        return tuple(self._roster)

    def refresh(self) -> Sequence[Student]:
        try:
            loaded = list(self._students.list_all())
        except StoreError as exc:
            logger.warning("Failed to load students: %s", exc)
            raise LoadError("Could not load students.") from exc
        self._roster = loaded
        return self.students

    def get(self, student_id: str) -> Optional[Student]:
        for student in self._roster:
            if student.id == student_id:
                return student
        return None

    def students_in_class(self, class_id: Optional[str], query: str = "") -> list[Student]:
        needle = query.strip().lower()
        return [
            s
            for s in self._roster
            if s.class_id == class_id and (not needle or needle in s.haystack())
        ]

    def search(self, query: str) -> list[Student]:
        """Whole-school search used by the header search box."""
        needle = _fold(query.strip())
        if len(needle) < MIN_GLOBAL_SEARCH_LENGTH:
            return []
        return [s for s in self._roster if needle in _fold(s.haystack())]

    def next_roll_number(self) -> int:
        return len(self._roster) + 1

    def save(self, draft: StudentDraft) -> Student:
        student = self._validate(draft)
        try:
            if draft.id:
                saved = self._students.update(student)
                self._roster = [saved if s.id == saved.id else s for s in self._roster]
            else:
                saved = self._students.insert_one(student)
                self._roster.append(saved)
        except StoreError as exc:
            logger.warning("Failed to save student %s: %s", student.id, exc)
            raise WriteError(f"Could not save student: {exc}") from exc
        return saved

    def delete(self, student_id: str) -> None:
        try:
            self._students.delete(student_id)
        except StoreError as exc:
            logger.warning("Failed to delete student %s: %s", student_id, exc)
            raise WriteError("Unable to delete student.") from exc
        self._roster = [s for s in self._roster if s.id != student_id]
        self._attendance_book.forget_student(student_id)

    def merge(self, created: Iterable[Student]) -> None:
        known = {s.id for s in self._roster}
        self._roster.extend(s for s in created if s.id not in known)

    def _validate(self, draft: StudentDraft) -> Student:
        name = require_non_empty(draft.name, "Full name")
        if not is_known_class(draft.class_id):
            raise ValidationError("Please choose a class from the list")
        return Student(
            id=draft.id or str(uuid.uuid4()),
            name=name,
            class_id=draft.class_id,
            roll_number=optional_int(draft.roll_number, "Roll number"),
            age=optional_int(draft.age, "Age"),
            phone=optional_text(draft.phone),
            alt_phone=optional_text(draft.alt_phone),
        )

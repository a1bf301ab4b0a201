from __future__ import annotations

from typing import Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Backend interface for student rows.

    Every method raises StoreError when the backend fails or rejects the call.
    """

    def list_all(self) -> Sequence[Student]:
        """All students ordered by roll number."""
        raise NotImplementedError

    def insert_one(self, student: Student) -> Student:
        raise NotImplementedError

    def insert_many(self, students: Sequence[Student]) -> Sequence[Student]:
        """Insert all rows or none of them."""
        raise NotImplementedError

    def update(self, student: Student) -> Student:
        raise NotImplementedError

    def delete(self, student_id: str) -> None:
        raise NotImplementedError

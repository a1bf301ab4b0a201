from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..classes.matcher import ClassMatch
from ..students.model import Student


@dataclass(frozen=True)
class CandidateRow:
    """A parsed spreadsheet row waiting for the teacher to confirm it.

    `id` is generated at parse time and becomes the student's id on commit,
    so a row that was already stored cannot be stored twice.
    """

    id: str
    row_number: int
    name: str
    class_id: str
    roll_number: Optional[int] = None
    age: Optional[int] = None
    phone: str = ""
    alt_phone: str = ""
    class_match: Optional[ClassMatch] = None

    @property
    def needs_review(self) -> bool:
        return not self.name or bool(self.class_match and self.class_match.ambiguous)

    def to_student(self) -> Student:
        return Student(
            id=self.id,
            name=self.name,
            class_id=self.class_id,
            roll_number=self.roll_number,
            age=self.age,
            phone=self.phone or None,
            alt_phone=self.alt_phone or None,
        )


@dataclass(frozen=True)
class RowFailure:
    row_number: int
    candidate_id: str
    message: str


@dataclass(frozen=True)
class CommitResult:
    total: int
    created: list[Student] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)
    chunks_attempted: int = 0

    @property
    def success_count(self) -> int:
        return len(self.created)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def failed_rows(self) -> list[int]:
        return [f.row_number for f in self.failures]

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AbsenceDetail:
    student: Student
    dates: tuple[str, ...]


@dataclass(frozen=True)
class ClassReport:
    class_id: str
    start: Optional[str]
    end: Optional[str]
    roster_size: int
    unique_days: int
    total_student_days: int
    counts: dict[AttendanceStatus, int] = field(default_factory=dict)
    percentages: dict[AttendanceStatus, int] = field(default_factory=dict)
    absent_details: list[AbsenceDetail] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_student_days == 0

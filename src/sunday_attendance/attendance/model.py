from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Persisted attendance row; `date` is an ISO calendar date string."""

    student_id: str
    class_id: str
    date: str
    status: AttendanceStatus


@dataclass(frozen=True)
class HistoryRow:
    """Read-model for the history grid: one student and their records, newest first."""

    student: Student
    records: tuple[tuple[str, AttendanceStatus], ...]

    def status_on(self, iso_date: str):
        return dict(self.records).get(iso_date)

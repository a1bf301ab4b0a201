from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, student_id: str, class_id: str, date: str, status: AttendanceStatus) -> None:
        raise NotImplementedError

    def delete(self, *, student_id: str, date: str) -> None:
        raise NotImplementedError

from __future__ import annotations

import logging
import threading
from typing import Iterable, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import LoadError, StoreError, ValidationError, WriteError
from ..students.model import Student
from .attendance_map import AttendanceMap
from .model import HistoryRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceBook:
    """Owns the cached AttendanceMap and every write to attendance records.

    Writes are applied in two phases: the tentative patch is visible
    immediately; if the backend rejects it the cache is rebuilt from the
    backend instead of undoing the patch by hand.
    The map is shared by request threads; patches swap it under a lock.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance
        self._map = AttendanceMap()
        self._lock = threading.Lock()

    @property
    def current(self) -> AttendanceMap:
        return self._map

    def refresh(self) -> AttendanceMap:
        try:
            records = self._attendance.list_all()
        except StoreError as exc:
            logger.warning("Failed to load attendance: %s", exc)
            raise LoadError("Could not load attendance records.") from exc
        self._map = AttendanceMap.from_records(records)
        return self._map

    def mark(self, *, student_id: str, class_id: str, on: str, status: AttendanceStatus | str) -> AttendanceMap:
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {status}")

        with self._lock:
            previous = self._map
            self._map = previous.with_status(student_id, on, status)
        try:
            self._attendance.upsert(student_id=student_id, class_id=class_id, date=on, status=status)
        except StoreError as exc:
            logger.warning("Failed to save attendance for %s on %s: %s", student_id, on, exc)
            self._resync(previous)
            raise WriteError("Could not save attendance.") from exc
        return self._map

    def clear(self, *, student_id: str, on: str) -> AttendanceMap:
        with self._lock:
            previous = self._map
            self._map = previous.without(student_id, on)
        try:
            self._attendance.delete(student_id=student_id, date=on)
        except StoreError as exc:
            logger.warning("Failed to clear attendance for %s on %s: %s", student_id, on, exc)
            self._resync(previous)
            raise WriteError("Could not clear attendance.") from exc
        return self._map

    def forget_student(self, student_id: str) -> None:
        """Drop a deleted student's history from the cache."""
        with self._lock:
            self._map = self._map.without_student(student_id)

    def history_rows(self, students: Iterable[Student]) -> list[HistoryRow]:
        rows = []
        for student in students:
            records = sorted(self._map.statuses_for(student.id).items(), key=lambda item: item[0], reverse=True)
            rows.append(HistoryRow(student=student, records=tuple(records)))
        return rows

    def _resync(self, fallback: AttendanceMap) -> None:
        try:
            self._map = AttendanceMap.from_records(self._attendance.list_all())
        except StoreError as exc:
            logger.warning("Resync after failed write also failed, keeping last confirmed map: %s", exc)
            self._map = fallback


def history_dates(rows: Sequence[HistoryRow]) -> list[str]:
    return sorted({d for row in rows for d, _ in row.records})

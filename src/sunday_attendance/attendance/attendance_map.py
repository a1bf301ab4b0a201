"""In-memory index student -> date -> status.

Instances are never mutated; every transition returns a new map so a
tentative edit can be dropped by simply keeping the previous instance.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class AttendanceMap:
    def __init__(self, entries: Optional[Mapping[str, Mapping[str, AttendanceStatus]]] = None):
        self._entries: dict[str, dict[str, AttendanceStatus]] = {
            student_id: dict(history) for student_id, history in (entries or {}).items() if history
        }

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceMap":
        entries: dict[str, dict[str, AttendanceStatus]] = {}
        for r in records:
            if not r.student_id or not r.date:
                continue
            try:
                status = AttendanceStatus(r.status)
            except ValueError:
                logger.warning("Skipping attendance row with unknown status %r (student=%s, date=%s)", r.status, r.student_id, r.date)
                continue
            entries.setdefault(r.student_id, {})[r.date] = status
        return cls(entries)

    def statuses_for(self, student_id: str) -> Mapping[str, AttendanceStatus]:
        return MappingProxyType(self._entries.get(student_id, {}))

    def status_on(self, student_id: str, iso_date: str) -> Optional[AttendanceStatus]:
        return self._entries.get(student_id, {}).get(iso_date)

    def student_ids(self) -> list[str]:
        return list(self._entries)

    def with_status(self, student_id: str, iso_date: str, status: AttendanceStatus) -> "AttendanceMap":
        entries = dict(self._entries)
        history = dict(entries.get(student_id, {}))
        history[iso_date] = AttendanceStatus(status)
        entries[student_id] = history
        return AttendanceMap(entries)

    def without(self, student_id: str, iso_date: str) -> "AttendanceMap":
        if iso_date not in self._entries.get(student_id, {}):
            return self
        entries = dict(self._entries)
        history = dict(entries[student_id])
        del history[iso_date]
        entries[student_id] = history
        return AttendanceMap(entries)

    def without_student(self, student_id: str) -> "AttendanceMap":
        if student_id not in self._entries:
            return self
        entries = dict(self._entries)
        del entries[student_id]
        return AttendanceMap(entries)

    def __len__(self) -> int:
        return sum(len(history) for history in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttendanceMap):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"AttendanceMap({self._entries!r})"

from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status codes stored per (student, date)."""

    PRESENT = "P"
    PERMISSION = "PR"
    ABSENT = "A"

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.PERMISSION: "Permission",
            AttendanceStatus.ABSENT: "Absent",
        }[self]


class MatchMethod(str, Enum):
    """How an imported row was assigned to a class."""

    PINNED = "pinned"
    LABEL = "label"
    INDEX = "index"
    DEFAULT = "default"

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..attendance.attendance_map import AttendanceMap
from ..core.enums import AttendanceStatus
from ..students.model import Student
from .model import AbsenceDetail, ClassReport


def _in_window(iso_date: str, start: Optional[str], end: Optional[str]) -> bool:
    # ISO dates sort lexicographically in calendar order.
    return (not start or iso_date >= start) and (not end or iso_date <= end)


def percent(value: int, total: int) -> int:
    """Nearest whole percent, halves rounded up; 0 when there is nothing to divide."""
    if total == 0:
        return 0
    return int(math.floor(value * 100 / total + 0.5))


def build_class_report(
    students: Sequence[Student],
    attendance: AttendanceMap,
    class_id: str,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> ClassReport:
    """Presence/permission/absence summary for one class.

    A day counts once any student of the class has a record on it. On such a
    day every student without a record is counted absent, so a student who
    was never marked and one explicitly marked `A` look the same.
    """
    roster = [s for s in students if s.class_id == class_id]

    active_dates = sorted(
        {
            d
            for s in roster
            for d, status in attendance.statuses_for(s.id).items()
            if status and _in_window(d, start, end)
        }
    )

    counts = {status: 0 for status in AttendanceStatus}
    absent_details = []
    for student in roster:
        history = attendance.statuses_for(student.id)
        absent_on = []
        for d in active_dates:
            status = history.get(d) or AttendanceStatus.ABSENT
            counts[status] += 1
            if status == AttendanceStatus.ABSENT:
                absent_on.append(d)
        if absent_on:
            absent_details.append(AbsenceDetail(student=student, dates=tuple(absent_on)))

    total = sum(counts.values())
    return ClassReport(
        class_id=class_id,
        start=start or None,
        end=end or None,
        roster_size=len(roster),
        unique_days=len(active_dates),
        total_student_days=total,
        counts=counts,
        percentages={status: percent(n, total) for status, n in counts.items()},
        absent_details=absent_details,
    )

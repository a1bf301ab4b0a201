from __future__ import annotations

import threading

import pytest

from sunday_attendance.attendance.attendance_map import AttendanceMap
from sunday_attendance.attendance.model import AttendanceRecord
from sunday_attendance.attendance.service import AttendanceBook, history_dates
from sunday_attendance.core.enums import AttendanceStatus
from sunday_attendance.core.exceptions import LoadError, StoreError, ValidationError, WriteError
from sunday_attendance.students.model import Student

P, PR, A = AttendanceStatus.PRESENT, AttendanceStatus.PERMISSION, AttendanceStatus.ABSENT


class InMemoryAttendance:
    def __init__(self, records=()):
        self.rows = {(r.student_id, r.date): r for r in records}
        self.fail_writes = False
        self.fail_reads = False
        self.during_write = None

    def list_all(self):
        if self.fail_reads:
            raise StoreError("connection refused")
        return list(self.rows.values())

    def upsert(self, *, student_id, class_id, date, status):
        if self.during_write:
            self.during_write()
        if self.fail_writes:
            raise StoreError("permission denied")
        self.rows[(student_id, date)] = AttendanceRecord(student_id, class_id, date, status)

    def delete(self, *, student_id, date):
        if self.fail_writes:
            raise StoreError("permission denied")
        self.rows.pop((student_id, date), None)


def _book(records=()):
    repo = InMemoryAttendance(records)
    book = AttendanceBook(repo)
    book.refresh()
    return repo, book


def test_map_from_records_skips_incomplete_and_unknown_rows():
    amap = AttendanceMap.from_records(
        [
            AttendanceRecord("s1", "c", "2024-01-01", "P"),
            AttendanceRecord("s1", "c", "2024-01-02", "LATE"),
            AttendanceRecord("", "c", "2024-01-02", "P"),
            AttendanceRecord("s2", "c", "", "P"),
        ]
    )

    assert dict(amap.statuses_for("s1")) == {"2024-01-01": P}
    assert amap.student_ids() == ["s1"]
    assert len(amap) == 1


def test_map_transitions_return_new_maps():
    base = AttendanceMap({"s1": {"2024-01-01": P}})

    marked = base.with_status("s1", "2024-01-02", PR)
    cleared = marked.without("s1", "2024-01-01")

    assert base.status_on("s1", "2024-01-02") is None
    assert marked.status_on("s1", "2024-01-02") == PR
    assert cleared.status_on("s1", "2024-01-01") is None
    assert base.without("nobody", "2024-01-01") is base


def test_mark_applies_locally_and_writes_through():
    repo, book = _book()
    seen = []
    repo.during_write = lambda: seen.append(book.current.status_on("s1", "2024-02-04"))

    book.mark(student_id="s1", class_id="grade-1", on="2024-02-04", status="PR")

    assert seen == [PR]
    assert book.current.status_on("s1", "2024-02-04") == PR
    assert repo.rows[("s1", "2024-02-04")].status == PR


def test_mark_overwrites_existing_status():
    _, book = _book([AttendanceRecord("s1", "grade-1", "2024-02-04", P)])

    book.mark(student_id="s1", class_id="grade-1", on="2024-02-04", status=A)

    assert book.current.status_on("s1", "2024-02-04") == A
    assert len(book.current) == 1


def test_failed_write_is_reconciled_from_backend():
    repo, book = _book([AttendanceRecord("s1", "grade-1", "2024-02-04", P)])
    # Another teacher changed the record meanwhile.
    repo.rows[("s2", "2024-02-04")] = AttendanceRecord("s2", "grade-1", "2024-02-04", PR)
    repo.fail_writes = True

    with pytest.raises(WriteError):
        book.mark(student_id="s1", class_id="grade-1", on="2024-02-04", status=A)

    assert book.current.status_on("s1", "2024-02-04") == P
    assert book.current.status_on("s2", "2024-02-04") == PR


def test_failed_write_with_failed_resync_restores_previous_map():
    repo, book = _book([AttendanceRecord("s1", "grade-1", "2024-02-04", P)])
    before = book.current
    repo.fail_writes = True
    repo.fail_reads = True

    with pytest.raises(WriteError):
        book.clear(student_id="s1", on="2024-02-04")

    assert book.current == before


def test_clear_removes_entry():
    repo, book = _book([AttendanceRecord("s1", "grade-1", "2024-02-04", P)])

    book.clear(student_id="s1", on="2024-02-04")

    assert book.current.status_on("s1", "2024-02-04") is None
    assert repo.rows == {}


def test_unknown_status_is_rejected_before_any_write():
    repo, book = _book()

    with pytest.raises(ValidationError):
        book.mark(student_id="s1", class_id="grade-1", on="2024-02-04", status="LATE")

    assert repo.rows == {}


def test_load_failure_keeps_cached_map():
    repo, book = _book([AttendanceRecord("s1", "grade-1", "2024-02-04", P)])
    repo.fail_reads = True

    with pytest.raises(LoadError):
        book.refresh()

    assert book.current.status_on("s1", "2024-02-04") == P


def test_history_rows_newest_first_and_dates_union():
    _, book = _book(
        [
            AttendanceRecord("s1", "grade-1", "2024-02-04", P),
            AttendanceRecord("s1", "grade-1", "2024-02-11", A),
            AttendanceRecord("s2", "grade-1", "2024-01-28", PR),
        ]
    )
    students = [Student(id="s1", name="Abel", class_id="grade-1"), Student(id="s2", name="Sara", class_id="grade-1")]

    rows = book.history_rows(students)

    assert rows[0].records == (("2024-02-11", A), ("2024-02-04", P))
    assert rows[1].status_on("2024-01-28") == PR
    assert history_dates(rows) == ["2024-01-28", "2024-02-04", "2024-02-11"]


def test_concurrent_marks_all_land_in_the_cache():
    _, book = _book()
    students = [f"s{i}" for i in range(40)]

    def worker(student_id):
        book.mark(student_id=student_id, class_id="grade-1", on="2024-02-04", status=P)

    threads = [threading.Thread(target=worker, args=(s,)) for s in students]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(book.current.student_ids()) == sorted(students)

from __future__ import annotations

import io

import pandas as pd
import pytest

from sunday_attendance.attendance.service import AttendanceBook
from sunday_attendance.core.exceptions import ImportParseError, StoreError, ValidationError
from sunday_attendance.imports.pipeline import BatchCommitPipeline
from sunday_attendance.imports.service import ImportService
from sunday_attendance.students.service import RosterService


class FakeStudentsRepo:
    def __init__(self, bad_names=()):
        self.bad_names = set(bad_names)
        self.stored = {}

    def list_all(self):
        return list(self.stored.values())

    def insert_many(self, students):
        for s in students:
            if s.name in self.bad_names or s.id in self.stored:
                raise StoreError(f"rejected {s.name!r}")
        self.stored.update({s.id: s for s in students})
        return list(students)

    def insert_one(self, student):
        return self.insert_many([student])[0]


class FakeAttendanceRepo:
    def list_all(self):
        return []


def _workbook(rows) -> io.BytesIO:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, index=False, header=False)
    buf.seek(0)
    return buf


def _sheet(names):
    return _workbook([["Roll", "Name", "Class", "Age", "Phone", "Alt"]] + [[i, n, "Grade 1", 10, "", ""] for i, n in enumerate(names, 1)])


@pytest.fixture
def setup():
    def _build(bad_names=()):
        repo = FakeStudentsRepo(bad_names)
        roster = RosterService(repo, AttendanceBook(FakeAttendanceRepo()))
        service = ImportService(BatchCommitPipeline(repo, chunk_size=2, throttle_seconds=0), roster)
        return repo, roster, service

    return _build


def test_successful_commit_merges_roster_and_clears_preview(setup):
    repo, roster, service = setup()
    service.upload("t1", _sheet(["Abel", "Sara", "Liya"]), "kids.xlsx")

    result = service.commit("t1")

    assert result.success_count == 3
    assert service.preview("t1") == ()
    assert [s.name for s in roster.students] == ["Abel", "Sara", "Liya"]


def test_partial_failure_keeps_only_failed_rows_for_retry(setup):
    repo, roster, service = setup(bad_names={"Sara"})
    preview = service.upload("t1", _sheet(["Abel", "Sara", "Liya"]), "kids.xlsx")

    result = service.commit("t1")

    assert result.failed_rows == [2]
    assert [r.name for r in service.preview("t1")] == ["Sara"]
    assert {s.id for s in roster.students} == {preview[0].id, preview[2].id}

    # Fix the data at the source and retry: nothing is stored twice.
    repo.bad_names.clear()
    retry = service.commit("t1")

    assert retry.total == 1
    assert retry.success_count == 1
    assert len(repo.stored) == 3
    assert service.preview("t1") == ()


def test_candidate_id_becomes_student_id(setup):
    repo, _, service = setup()
    preview = service.upload("t1", _sheet(["Abel"]), "kids.xlsx")

    service.commit("t1")

    assert list(repo.stored) == [preview[0].id]


def test_parse_failure_keeps_previous_preview(setup):
    _, _, service = setup()
    service.upload("t1", _sheet(["Abel"]), "kids.xlsx")

    with pytest.raises(ImportParseError):
        service.upload("t1", io.BytesIO(b"garbage"), "kids.xlsx")

    assert [r.name for r in service.preview("t1")] == ["Abel"]


def test_previews_are_kept_per_teacher_and_can_be_discarded(setup):
    _, _, service = setup()
    service.upload("t1", _sheet(["Abel"]), "a.xlsx")
    service.upload("t2", _sheet(["Sara", "Liya"]), "b.xlsx", pinned_class_id="youth")

    service.discard("t1")

    assert service.preview("t1") == ()
    assert {r.class_id for r in service.preview("t2")} == {"youth"}


def test_unknown_pinned_class_is_rejected(setup):
    _, _, service = setup()

    with pytest.raises(ValidationError):
        service.upload("t1", _sheet(["Abel"]), "a.xlsx", pinned_class_id="grade-99")


def test_commit_without_preview_is_a_no_op(setup):
    _, _, service = setup()

    result = service.commit("t1")

    assert result.total == 0

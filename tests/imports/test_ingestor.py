from __future__ import annotations

import io
import itertools

import pandas as pd
import pytest
from openpyxl import Workbook

from sunday_attendance.core.enums import MatchMethod
from sunday_attendance.core.exceptions import ImportParseError
from sunday_attendance.imports.ingestor import ingest, normalize_grid, parse_rows, read_sheet

HEADER = ["Roll", "Name", "Class", "Age", "Phone", "Alt"]


def _ids():
    counter = itertools.count(1)
    return lambda: f"tmp-{next(counter)}"


def test_normalized_grid_has_width_of_widest_row():
    rows = [["a"], [], ["a", "b", "c", None], ["x", float("nan")]]

    grid = normalize_grid(rows)

    assert [len(r) for r in grid] == [4, 4, 4, 4]
    assert grid[1] == ["", "", "", ""]
    assert grid[2] == ["a", "b", "c", ""]
    assert grid[3] == ["x", "", "", ""]


def test_normalize_empty_sheet():
    assert normalize_grid([]) == []


def test_blank_rows_are_kept_as_candidates():
    rows = [HEADER, [1, "Abel", "C1", 12, "0911", ""], ["", "", "", "", "", ""]]

    candidates = parse_rows(rows, id_factory=_ids())

    assert len(candidates) == 2
    assert candidates[0].name == "Abel"
    assert candidates[1].name == ""
    assert candidates[1].roll_number is None
    assert candidates[1].needs_review


def test_positional_mapping_and_row_numbers():
    rows = [
        HEADER,
        [1, "Abel", "Grade 2", 12, "0911", "0922"],
        ["3.0", "  Liya  ", "", "", 911223344.0, None],
    ]

    first, second = parse_rows(rows, id_factory=_ids())

    assert (first.row_number, second.row_number) == (1, 2)
    assert (first.id, second.id) == ("tmp-1", "tmp-2")
    assert first.roll_number == 1
    assert first.class_id == "grade-2"
    assert first.age == 12
    assert (first.phone, first.alt_phone) == ("0911", "0922")

    assert second.roll_number == 3
    assert second.name == "Liya"
    assert second.age is None
    assert second.phone == "911223344"
    assert second.alt_phone == ""
    assert second.class_match.method == MatchMethod.DEFAULT


def test_narrow_sheet_reads_missing_columns_as_blank():
    candidates = parse_rows([["Roll", "Name"], [5, "Marta"]])

    assert candidates[0].name == "Marta"
    assert candidates[0].age is None
    assert candidates[0].phone == ""


def test_non_numeric_text_in_numeric_columns_becomes_empty():
    candidates = parse_rows([HEADER, ["first", "Abel", "", "twelve", "", ""]])

    assert candidates[0].roll_number is None
    assert candidates[0].age is None


def test_pinned_class_overrides_class_column():
    rows = [HEADER, [1, "Abel", "Grade 5", 12, "", ""], [2, "Sara", "", 9, "", ""]]

    candidates = parse_rows(rows, pinned_class_id="youth")

    assert {c.class_id for c in candidates} == {"youth"}
    assert all(c.class_match.method == MatchMethod.PINNED for c in candidates)


def test_header_only_sheet_has_no_candidates():
    assert parse_rows([HEADER]) == []


def _xlsx_bytes(rows) -> io.BytesIO:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, index=False, header=False)
    buf.seek(0)
    return buf


def test_ingest_reads_first_sheet_of_xlsx():
    buf = _xlsx_bytes([HEADER, [1, "Abel", "Grade 1", 12, "0911", ""], [2, "Sara", "Youth", 16, "", "0933"]])

    candidates = ingest(buf, "roster.XLSX")

    assert [c.name for c in candidates] == ["Abel", "Sara"]
    assert [c.class_id for c in candidates] == ["grade-1", "youth"]
    assert candidates[0].age == 12
    assert candidates[1].alt_phone == "0933"


def test_read_sheet_keeps_header_row():
    rows = read_sheet(_xlsx_bytes([HEADER, [1, "Abel", "", "", "", ""]]), "roster.xlsx")

    assert rows[0] == HEADER
    assert rows[1][1] == "Abel"


def test_unsupported_extension_is_rejected():
    with pytest.raises(ImportParseError):
        read_sheet(io.BytesIO(b"Roll,Name\n1,Abel\n"), "roster.csv")


def test_corrupt_file_aborts_the_import():
    with pytest.raises(ImportParseError):
        ingest(io.BytesIO(b"this is not a workbook"), "roster.xlsx")


def test_trailing_blank_row_in_xlsx_upload_is_kept():
    wb = Workbook()
    ws = wb.active
    ws.append(HEADER)
    ws.append([1, "Abel", "C1", 12, "0911", ""])
    ws.append(["", "", "", "", "", ""])
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    candidates = ingest(buf, "roster.xlsx")

    assert [c.row_number for c in candidates] == [1, 2]
    assert candidates[0].name == "Abel"
    assert candidates[0].age == 12
    assert candidates[1].name == ""
    assert candidates[1].needs_review

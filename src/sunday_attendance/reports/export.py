"""Excel downloads for rosters, history grids and absence lists."""
from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..attendance.model import HistoryRow
from ..classes.directory import resolve_class_label
from ..core.constants import EXCEL_SHEET_NAME_LIMIT
from ..students.model import Student
from .model import ClassReport

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_INVALID_SHEET_CHARS = str.maketrans({c: " " for c in "[]:*?/\\"})


def sheet_name_for(class_id: str, fallback: str) -> str:
    label = resolve_class_label(class_id)
    name = (label if label != "Unknown" else fallback).translate(_INVALID_SHEET_CHARS).strip()
    return (name or fallback)[:EXCEL_SHEET_NAME_LIMIT]


def _blank(value) -> object:
    return "" if value is None else value


def _to_workbook(rows: list[dict], *, columns: list[str], sheet_name: str) -> io.BytesIO:
    df = pd.DataFrame(rows, columns=columns)

    # Write to an in-memory workbook (nothing touches the disk).
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    output.seek(0)
    return output


def roster_workbook(students: Sequence[Student], class_id: str) -> io.BytesIO:
    rows = [
        {
            "Roll": _blank(s.roll_number),
            "Name": s.name,
            "Age": _blank(s.age),
            "Phone": _blank(s.phone),
            "Alt Phone": _blank(s.alt_phone),
        }
        for s in students
    ]
    return _to_workbook(
        rows,
        columns=["Roll", "Name", "Age", "Phone", "Alt Phone"],
        sheet_name=sheet_name_for(class_id, "Roster"),
    )


def history_workbook(history: Sequence[HistoryRow], dates: Sequence[str], class_id: str) -> io.BytesIO:
    rows = []
    for row in history:
        statuses = dict(row.records)
        item = {
            "Roll": _blank(row.student.roll_number),
            "Name": row.student.name,
            "Phone": _blank(row.student.phone),
            "Alt Phone": _blank(row.student.alt_phone),
        }
        for d in dates:
            status = statuses.get(d)
            item[d] = status.value if status else ""
        rows.append(item)
    return _to_workbook(
        rows,
        columns=["Roll", "Name", "Phone", "Alt Phone", *dates],
        sheet_name=sheet_name_for(class_id, "History"),
    )


def absences_workbook(report: ClassReport) -> io.BytesIO:
    rows = [
        {
            "Roll": _blank(item.student.roll_number),
            "Name": item.student.name,
            "Phone": _blank(item.student.phone),
            "Alt Phone": _blank(item.student.alt_phone),
            "Days Absent": ", ".join(item.dates),
        }
        for item in report.absent_details
    ]
    return _to_workbook(
        rows,
        columns=["Roll", "Name", "Phone", "Alt Phone", "Days Absent"],
        sheet_name=sheet_name_for(report.class_id, "Absent"),
    )

"""Spreadsheet -> CandidateRow conversion.

Columns are positional: roll number, name, class hint, age, phone,
alternate phone. The first row is a header and is dropped. Every other row,
blank or not, becomes a candidate so gaps show up in the preview.
"""
from __future__ import annotations

import logging
import math
import numbers
import uuid
from pathlib import Path
from typing import IO, Any, Callable, Optional, Sequence

import pandas as pd
from openpyxl import load_workbook

from ..classes.directory import CLASS_DIRECTORY, ClassInfo
from ..classes.matcher import match_class, pinned
from ..core.exceptions import ImportParseError
from .model import CandidateRow

logger = logging.getLogger(__name__)

EXCEL_ENGINES = {
    ".xlsx": "openpyxl",
    ".xls": "xlrd",
}

COL_ROLL, COL_NAME, COL_CLASS, COL_AGE, COL_PHONE, COL_ALT_PHONE = range(6)


def read_sheet(stream: IO[bytes], filename: str) -> list[list[Any]]:
    """Read the first sheet of an .xlsx/.xls upload as raw rows (header included).

    Trailing blank rows are part of the result for .xlsx files.
    """
    engine = EXCEL_ENGINES.get(Path(filename or "").suffix.lower())
    if engine is None:
        raise ImportParseError("Please upload an .xlsx or .xls file.")

    try:
        if engine == "openpyxl":
            return _read_xlsx(stream)
        frame = pd.read_excel(stream, sheet_name=0, header=None, dtype=object, engine=engine)
    except Exception as exc:
        # openpyxl, pandas and xlrd surface zip, xml and format errors without a common base class.
        logger.warning("Could not read spreadsheet %r: %s", filename, exc)
        raise ImportParseError("Could not read the spreadsheet. Check the file and try again.") from exc

    frame = frame.astype(object).where(frame.notna(), "")
    return frame.values.tolist()


def _read_xlsx(stream: IO[bytes]) -> list[list[Any]]:
    # pandas drops empty trailing rows; iter_rows yields every row up to max_row.
    wb = load_workbook(stream, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def normalize_grid(rows: Sequence[Sequence[Any]]) -> list[list[Any]]:
    """Pad every row with "" up to the widest row; None/NaN cells become ""."""
    width = max((len(r) for r in rows), default=0)
    grid = []
    for row in rows:
        cells = ["" if _is_blank(v) else v for v in row]
        grid.append(cells + [""] * (width - len(cells)))
    return grid


def parse_rows(
    rows: Sequence[Sequence[Any]],
    *,
    pinned_class_id: Optional[str] = None,
    directory: Sequence[ClassInfo] = CLASS_DIRECTORY,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[CandidateRow]:
    grid = normalize_grid(rows)
    candidates = []
    for row_number, row in enumerate(grid[1:], start=1):
        match = pinned(pinned_class_id) if pinned_class_id else match_class(_text(_cell(row, COL_CLASS)), directory)
        candidates.append(
            CandidateRow(
                id=id_factory(),
                row_number=row_number,
                roll_number=_number(_cell(row, COL_ROLL)),
                name=_text(_cell(row, COL_NAME)),
                class_id=match.class_id,
                age=_number(_cell(row, COL_AGE)),
                phone=_text(_cell(row, COL_PHONE)),
                alt_phone=_text(_cell(row, COL_ALT_PHONE)),
                class_match=match,
            )
        )
    return candidates


def ingest(
    stream: IO[bytes],
    filename: str,
    *,
    pinned_class_id: Optional[str] = None,
    directory: Sequence[ClassInfo] = CLASS_DIRECTORY,
) -> list[CandidateRow]:
    rows = read_sheet(stream, filename)
    candidates = parse_rows(rows, pinned_class_id=pinned_class_id, directory=directory)
    logger.info("Parsed %d candidate rows from %s", len(candidates), filename)
    return candidates


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else ""


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _number(value: Any) -> Optional[int]:
    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return int(value) if math.isfinite(value) else None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return int(number) if math.isfinite(number) else None

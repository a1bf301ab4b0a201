from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_iso_date(value: Optional[str]) -> Optional[str]:
    """Return a canonical YYYY-MM-DD string, or None for blank input.

    Raises ValueError for anything that is not a calendar date.
    """
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value).strip()).isoformat()


def to_iso(value) -> str:
    """Render a date coming back from the driver (date, datetime or str) as ISO."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def human_date(iso_date: str) -> str:
    """'2024-01-07' -> 'Jan 7'."""
    d = parse_iso_date(iso_date)
    return f"{d.strftime('%b')} {d.day}"


def today_iso() -> str:
    return date.today().isoformat()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()

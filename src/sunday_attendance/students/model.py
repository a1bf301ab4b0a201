from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: one child on a class roster."""

    id: str
    name: str
    class_id: str
    roll_number: Optional[int] = None
    age: Optional[int] = None
    phone: Optional[str] = None
    alt_phone: Optional[str] = None
    created_at: Optional[datetime] = None

    def haystack(self) -> str:
        """Text searched by the roster filters."""
        parts = [self.name, self.roll_number, self.phone, self.alt_phone]
        return " ".join("" if p is None else str(p) for p in parts).lower()

    def with_class(self, class_id: str) -> "Student":
        return replace(self, class_id=class_id)


@dataclass(frozen=True)
class StudentDraft:
    """Raw values from the add/edit form; `id` is None for a new student."""

    id: Optional[str]
    name: str
    class_id: str
    roll_number: object = None
    age: object = None
    phone: object = None
    alt_phone: object = None

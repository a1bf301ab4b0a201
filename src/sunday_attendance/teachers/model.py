from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher account.

    Note: Plain data object, no DB access code.
    """

    teacher_id: int
    email: str
    password_hash: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionTeacher:
    """What we store into Flask session after login."""

    teacher_id: int
    email: str

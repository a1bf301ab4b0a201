from __future__ import annotations

from typing import Optional, Protocol

from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for teacher accounts.

    Note (DIP): the service depends on this interface, not on a concrete DB.
    """

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(self, *, email: str, password_hash: str) -> int:
        raise NotImplementedError

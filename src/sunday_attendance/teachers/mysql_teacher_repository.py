from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Teacher
from .repository import TeacherRepository


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, password_hash, created_at FROM teachers WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Teacher(
                teacher_id=int(r["id"]),
                email=r["email"],
                password_hash=r["password_hash"],
                created_at=r.get("created_at"),
            )

    def create(self, *, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO teachers(email, password_hash) VALUES(%s,%s)",
                (email, password_hash),
            )
            return int(cur.lastrowid)

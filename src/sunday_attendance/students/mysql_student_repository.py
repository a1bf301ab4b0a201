from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, full_name, class_id, roll_number, age, phone, alt_phone, created_at"


def student_from_row(row: Dict[str, Any]) -> Student:
    """Persisted row -> domain Student."""
    return Student(
        id=str(row["id"]),
        name=row.get("full_name") or "",
        class_id=row["class_id"],
        roll_number=_int_or_none(row.get("roll_number")),
        age=_int_or_none(row.get("age")),
        phone=row.get("phone") or None,
        alt_phone=row.get("alt_phone") or None,
        created_at=row.get("created_at"),
    )


def student_to_row(student: Student) -> Dict[str, Any]:
    """Domain Student -> column values (blank optional fields stored as NULL)."""
    return {
        "id": student.id,
        "full_name": student.name,
        "class_id": student.class_id,
        "roll_number": student.roll_number,
        "age": student.age,
        "phone": student.phone or None,
        "alt_phone": student.alt_phone or None,
    }


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students
                ORDER BY roll_number IS NULL, roll_number ASC, created_at ASC
                """
            )
            return [student_from_row(r) for r in fetchall(cur)]

    def insert_one(self, student: Student) -> Student:
        return self.insert_many([student])[0]

    def insert_many(self, students: Sequence[Student]) -> Sequence[Student]:
        if not students:
            return []
        created_at = now_local().replace(microsecond=0)
        params = []
        for s in students:
            row = student_to_row(s)
            params.append(
                (
                    row["id"],
                    row["full_name"],
                    row["class_id"],
                    row["roll_number"],
                    row["age"],
                    row["phone"],
                    row["alt_phone"],
                    created_at,
                )
            )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"""
                INSERT INTO students({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                params,
            )
        return [student_from_row({**student_to_row(s), "created_at": created_at}) for s in students]

    def update(self, student: Student) -> Student:
        row = student_to_row(student)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET full_name=%s, class_id=%s, roll_number=%s, age=%s, phone=%s, alt_phone=%s
                WHERE id=%s
                """,
                (
                    row["full_name"],
                    row["class_id"],
                    row["roll_number"],
                    row["age"],
                    row["phone"],
                    row["alt_phone"],
                    row["id"],
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (row["id"],))
            found = fetchone(cur)
            if not found:
                raise StoreError(f"Student {student.id} no longer exists")
            return student_from_row(found)

    def delete(self, student_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
            if cur.rowcount == 0:
                raise StoreError(f"Student {student_id} no longer exists")

from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, class_id, date, status
                FROM attendance_records
                ORDER BY date ASC
                """
            )
            # Status is kept raw here; AttendanceMap drops codes it does not know.
            return [
                AttendanceRecord(
                    student_id=str(r["student_id"]),
                    class_id=r["class_id"],
                    date=to_iso(r["date"]),
                    status=r["status"],
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, student_id: str, class_id: str, date: str, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, class_id, date, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE class_id=VALUES(class_id), status=VALUES(status)
                """,
                (student_id, class_id, date, AttendanceStatus(status).value),
            )

    def delete(self, *, student_id: str, date: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE student_id=%s AND date=%s",
                (student_id, date),
            )

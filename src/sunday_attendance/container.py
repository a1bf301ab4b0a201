from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceBook
from .core.constants import DEFAULT_IMPORT_CHUNK_SIZE, DEFAULT_IMPORT_THROTTLE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .imports.pipeline import BatchCommitPipeline
from .imports.service import ImportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import AuthService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    teachers_repo: TeacherRepository

    auth_service: AuthService
    roster_service: RosterService
    attendance_book: AttendanceBook
    import_service: ImportService


def assemble_container(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    teachers_repo: TeacherRepository,
    import_chunk_size: int = DEFAULT_IMPORT_CHUNK_SIZE,
    import_throttle_seconds: float = DEFAULT_IMPORT_THROTTLE_SECONDS,
) -> Container:
    attendance_book = AttendanceBook(attendance_repo)
    roster_service = RosterService(students_repo, attendance_book)
    pipeline = BatchCommitPipeline(
        students_repo,
        chunk_size=import_chunk_size,
        throttle_seconds=import_throttle_seconds,
    )

    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        teachers_repo=teachers_repo,
        auth_service=AuthService(teachers_repo),
        roster_service=roster_service,
        attendance_book=attendance_book,
        import_service=ImportService(pipeline, roster_service),
    )


def build_container(
    *,
    db_config: dict,
    import_chunk_size: int = DEFAULT_IMPORT_CHUNK_SIZE,
    import_throttle_seconds: float = DEFAULT_IMPORT_THROTTLE_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        import_chunk_size=import_chunk_size,
        import_throttle_seconds=import_throttle_seconds,
    )

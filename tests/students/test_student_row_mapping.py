from datetime import datetime

from sunday_attendance.students.model import Student
from sunday_attendance.students.mysql_student_repository import student_from_row, student_to_row


def test_blank_optional_fields_are_stored_as_null():
    row = student_to_row(Student(id="s1", name="Abel", class_id="grade-1", roll_number=None, age=None, phone="", alt_phone=None))

    assert row == {
        "id": "s1",
        "full_name": "Abel",
        "class_id": "grade-1",
        "roll_number": None,
        "age": None,
        "phone": None,
        "alt_phone": None,
    }


def test_row_is_mapped_back_to_student():
    created = datetime(2024, 2, 4, 9, 30)
    student = student_from_row(
        {
            "id": "s1",
            "full_name": "Abel",
            "class_id": "youth",
            "roll_number": "7",
            "age": 15,
            "phone": "",
            "alt_phone": "0911",
            "created_at": created,
        }
    )

    assert student == Student(
        id="s1", name="Abel", class_id="youth", roll_number=7, age=15, phone=None, alt_phone="0911", created_at=created
    )


def test_zero_roll_number_and_age_are_kept():
    row = student_to_row(Student(id="s1", name="Abel", class_id="kindergarten", roll_number=0, age=0))

    assert row["roll_number"] == 0
    assert row["age"] == 0

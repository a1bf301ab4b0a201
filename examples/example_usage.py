"""Example: use the service layer directly (no Flask).

Prints the attendance summary of every class, the same numbers the
Reports page shows.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from sunday_attendance.classes.directory import CLASS_DIRECTORY
from sunday_attendance.container import build_container
from sunday_attendance.reports.builder import build_class_report


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    container.roster_service.refresh()
    container.attendance_book.refresh()

    for klass in CLASS_DIRECTORY:
        report = build_class_report(
            container.roster_service.students,
            container.attendance_book.current,
            klass.id,
        )
        shares = ", ".join(f"{s.label} {report.percentages[s]}%" for s in report.counts)
        print(f"{klass.label}: {report.roster_size} students, {report.unique_days} days ({shares})")


if __name__ == "__main__":
    main()

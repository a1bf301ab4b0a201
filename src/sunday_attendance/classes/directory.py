"""Fixed list of classes taught at the school.

The directory is configuration data: it never changes while the app runs and
the order matters (imports may address a class by its position).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class ClassInfo:
    id: str
    label: str
    description: str


CLASS_DIRECTORY: tuple[ClassInfo, ...] = (
    ClassInfo("kindergarten", "Kindergarten", "Ages 4-6, first steps in prayer and song"),
    ClassInfo("grade-1", "Grade 1", "Ages 7-8, Fidel and the Lord's Prayer"),
    ClassInfo("grade-2", "Grade 2", "Ages 8-9, Bible stories"),
    ClassInfo("grade-3", "Grade 3", "Ages 9-10, Psalms and hymns"),
    ClassInfo("grade-4", "Grade 4", "Ages 10-11, lives of the saints"),
    ClassInfo("grade-5", "Grade 5", "Ages 11-12, church history"),
    ClassInfo("grade-6", "Grade 6", "Ages 12-14, sacraments and liturgy"),
    ClassInfo("youth", "Youth", "Ages 15 and up, fellowship and service"),
)


def default_class(directory: Sequence[ClassInfo] = CLASS_DIRECTORY) -> ClassInfo:
    return directory[0]


def get_class(class_id: Optional[str], directory: Sequence[ClassInfo] = CLASS_DIRECTORY) -> Optional[ClassInfo]:
    for klass in directory:
        if klass.id == class_id:
            return klass
    return None


def is_known_class(class_id: Optional[str], directory: Sequence[ClassInfo] = CLASS_DIRECTORY) -> bool:
    return get_class(class_id, directory) is not None


def resolve_class_label(class_id: Optional[str], directory: Sequence[ClassInfo] = CLASS_DIRECTORY) -> str:
    klass = get_class(class_id, directory)
    return klass.label if klass else "Unknown"

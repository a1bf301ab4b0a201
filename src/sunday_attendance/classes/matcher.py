from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import MatchMethod
from .directory import CLASS_DIRECTORY, ClassInfo, default_class

_FIRST_INTEGER = re.compile(r"\d+")


@dataclass(frozen=True)
class ClassMatch:
    """Outcome of resolving a free-text class hint.

    `ambiguous` is set whenever the id is a guess the teacher should check:
    several labels matched, the number was out of range, or nothing matched.
    """

    class_id: str
    method: MatchMethod
    ambiguous: bool = False


def pinned(class_id: str) -> ClassMatch:
    return ClassMatch(class_id=class_id, method=MatchMethod.PINNED)


def match_class(hint: Optional[str], directory: Sequence[ClassInfo] = CLASS_DIRECTORY) -> ClassMatch:
    """Resolve a class hint to a directory id. Never raises.

    Order: label contained in the hint (case-insensitive, longest label wins),
    then the first integer in the hint as a position in the directory, then
    the first class.
    """
    fallback = default_class(directory).id
    text = str(hint or "").strip().lower()
    if not text:
        return ClassMatch(class_id=fallback, method=MatchMethod.DEFAULT, ambiguous=True)

    hits = [klass for klass in directory if klass.label.lower() in text]
    if hits:
        best = max(hits, key=lambda klass: len(klass.label))
        return ClassMatch(class_id=best.id, method=MatchMethod.LABEL, ambiguous=len(hits) > 1)

    digits = _FIRST_INTEGER.search(text)
    if digits:
        index = int(digits.group(0))
        if index < len(directory):
            return ClassMatch(class_id=directory[index].id, method=MatchMethod.INDEX)
        return ClassMatch(class_id=fallback, method=MatchMethod.DEFAULT, ambiguous=True)

    return ClassMatch(class_id=fallback, method=MatchMethod.DEFAULT, ambiguous=True)

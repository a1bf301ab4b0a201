from __future__ import annotations

import logging
from typing import IO, Hashable, Optional, Sequence

from ..classes.directory import is_known_class
from ..core.exceptions import ValidationError
from ..students.service import RosterService
from .ingestor import ingest
from .model import CandidateRow, CommitResult
from .pipeline import BatchCommitPipeline

logger = logging.getLogger(__name__)


class ImportService:
    """Use case: upload a spreadsheet, review the preview, commit it to the roster.

    Previews are held per owner (the signed-in teacher) until they are
    committed without failures or discarded.
    """

    def __init__(self, pipeline: BatchCommitPipeline, roster: RosterService):
        self._pipeline = pipeline
        self._roster = roster
        self._pending: dict[Hashable, list[CandidateRow]] = {}

    def preview(self, owner: Hashable) -> Sequence[CandidateRow]:
        return tuple(self._pending.get(owner, ()))

    def upload(self, owner: Hashable, stream: IO[bytes], filename: str, *, pinned_class_id: Optional[str] = None) -> Sequence[CandidateRow]:
        if pinned_class_id and not is_known_class(pinned_class_id):
            raise ValidationError("Please choose a class from the list")
        # ImportParseError propagates and leaves any earlier preview in place.
        rows = ingest(stream, filename, pinned_class_id=pinned_class_id)
        self._pending[owner] = rows
        return self.preview(owner)

    def discard(self, owner: Hashable) -> None:
        self._pending.pop(owner, None)

    def commit(self, owner: Hashable) -> CommitResult:
        rows = self._pending.get(owner, [])
        if not rows:
            return CommitResult(total=0)

        result = self._pipeline.commit(rows)
        if result.created:
            self._roster.merge(result.created)

        if not result.failures:
            self._pending.pop(owner, None)
        else:
            stored = {s.id for s in result.created}
            self._pending[owner] = [r for r in rows if r.id not in stored]
        return result

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Sequence

from ..core.constants import DEFAULT_IMPORT_CHUNK_SIZE, DEFAULT_IMPORT_THROTTLE_SECONDS
from ..core.exceptions import StoreError
from ..students.repository import StudentRepository
from .model import CandidateRow, CommitResult, RowFailure

logger = logging.getLogger(__name__)


def chunked(rows: Sequence[CandidateRow], size: int) -> Iterator[Sequence[CandidateRow]]:
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


class BatchCommitPipeline:
    """Store candidate rows in chunks, isolating bad rows when a chunk fails.

    A chunk is one all-or-nothing insert. If it is rejected, its rows are
    retried one at a time in order; each failing row is recorded and the
    rest carry on. Chunks run strictly in order with a fixed pause between
    backend calls.
    """

    def __init__(
        self,
        students: StudentRepository,
        *,
        chunk_size: int = DEFAULT_IMPORT_CHUNK_SIZE,
        throttle_seconds: float = DEFAULT_IMPORT_THROTTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self._students = students
        self._chunk_size = int(chunk_size)
        self._throttle_seconds = float(throttle_seconds)
        self._sleep = sleep

    def commit(self, rows: Sequence[CandidateRow]) -> CommitResult:
        rows = list(rows)
        created = []
        failures: list[RowFailure] = []
        chunks_attempted = 0

        for chunk in chunked(rows, self._chunk_size):
            if chunks_attempted:
                self._pause()
            chunks_attempted += 1

            try:
                created.extend(self._students.insert_many([r.to_student() for r in chunk]))
                continue
            except StoreError as exc:
                logger.warning(
                    "Chunk %d (rows %d-%d) rejected, inserting rows one by one: %s",
                    chunks_attempted,
                    chunk[0].row_number,
                    chunk[-1].row_number,
                    exc,
                )

            for position, row in enumerate(chunk):
                if position:
                    self._pause()
                try:
                    created.append(self._students.insert_one(row.to_student()))
                except StoreError as exc:
                    logger.warning("Row %d rejected: %s", row.row_number, exc)
                    failures.append(RowFailure(row_number=row.row_number, candidate_id=row.id, message=str(exc)))

        logger.info(
            "Import finished: %d created, %d failed, %d chunks", len(created), len(failures), chunks_attempted
        )
        return CommitResult(total=len(rows), created=created, failures=failures, chunks_attempted=chunks_attempted)

    def _pause(self) -> None:
        if self._throttle_seconds > 0:
            self._sleep(self._throttle_seconds)

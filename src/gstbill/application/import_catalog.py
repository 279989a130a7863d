"""Application service: bulk catalog import.

An import moves through IDLE -> READING -> PARSING -> PERSISTING -> COMPLETE,
with FAILED reachable from READING, PARSING and PERSISTING.

The raw file is handed once to an isolated parsing context.  The records
that come back are written in fixed-size chunks, one ``bulk_add`` call per
chunk, with a short pause after each chunk so that an interactive host
can repaint.  A failing chunk stops the import; chunks committed before
it stay in the catalog and the report says how far the import got.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gstbill.application.catalog_parsing import (
    ParseFailure,
    ParseRequest,
    ParseWorker,
)
from gstbill.domain.exceptions import ImportInProgressError, StorageError, ValidationError
from gstbill.domain.repository.product_repository import ProductRepository

logger = logging.getLogger("gstbill.import")

DEFAULT_CHUNK_SIZE = 2000
DEFAULT_YIELD_DELAY = 0.01  # seconds


class ImportState(Enum):
    IDLE = "IDLE"
    READING = "READING"
    PARSING = "PARSING"
    PERSISTING = "PERSISTING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class ImportOutcome(Enum):
    COMPLETED = "COMPLETED"
    NO_VALID_ROWS = "NO_VALID_ROWS"
    FAILED = "FAILED"


@dataclass
class ImportReport:
    """What an import did, including how far a failed import got."""

    outcome: ImportOutcome
    total_rows: int = 0
    accepted: int = 0
    committed: int = 0
    chunk_sizes: list[int] = field(default_factory=list)
    progress: list[int] = field(default_factory=list)
    error: str | None = None

    @property
    def rejected(self) -> int:
        return self.total_rows - self.accepted

    @property
    def resume_offset(self) -> int | None:
        """Index of the first accepted record that was not written, if any."""
        if self.outcome is ImportOutcome.FAILED and self.committed < self.accepted:
            return self.committed
        return None


@dataclass
class ImportSession:
    """One import run, owned by whoever started it."""

    source: str
    state: ImportState = ImportState.IDLE
    progress: int = 0
    report: ImportReport | None = None

    def enter(self, state: ImportState) -> None:
        logger.info("Import of %s: %s -> %s", self.source, self.state.value, state.value)
        self.state = state


def compute_progress(processed: int, total: int) -> int:
    """Percentage of *total* done, rounded half up and capped at 100."""
    if total <= 0:
        return 100
    return min(100, (200 * processed + total) // (2 * total))


class BulkImportPipeline:

    def __init__(
        self,
        product_repo: ProductRepository,
        worker: ParseWorker,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        yield_delay: float = DEFAULT_YIELD_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if chunk_size <= 0:
            raise ValidationError("Import chunk size must be positive")
        self._product_repo = product_repo
        self._worker = worker
        self._chunk_size = chunk_size
        self._yield_delay = yield_delay
        self._sleep = sleep
        self._lock = threading.Lock()
        self._active: ImportSession | None = None

    @property
    def active_session(self) -> ImportSession | None:
        return self._active

    def run(
        self,
        source: bytes | Path,
        filename: str | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> ImportReport:
        """Import a spreadsheet, given as raw bytes or as a file path.

        Raises ImportInProgressError if another import is still running on
        this pipeline.  Every other failure is reported in the returned
        ImportReport with outcome FAILED.
        """
        if isinstance(source, Path):
            filename = filename or source.name
        session = ImportSession(source=filename or "<upload>")

        with self._lock:
            if self._active is not None:
                raise ImportInProgressError(
                    f"An import of {self._active.source} is already in progress"
                )
            self._active = session

        try:
            report = self._run(session, source, on_progress)
        finally:
            with self._lock:
                self._active = None

        session.report = report
        return report

    # --- Stages ---------------------------------------------------------------

    def _run(
        self,
        session: ImportSession,
        source: bytes | Path,
        on_progress: Callable[[int], None] | None,
    ) -> ImportReport:
        session.enter(ImportState.READING)
        if isinstance(source, Path):
            try:
                data = source.read_bytes()
            except OSError as exc:
                return self._fail(session, ImportReport(ImportOutcome.FAILED),
                                  f"Could not read {source}: {exc}")
        else:
            data = source

        session.enter(ImportState.PARSING)
        result = self._worker.submit(ParseRequest(data=data, filename=session.source))
        if isinstance(result, ParseFailure):
            return self._fail(session, ImportReport(ImportOutcome.FAILED),
                              f"Failed to process the file: {result.message}")

        records = result.records
        report = ImportReport(
            outcome=ImportOutcome.COMPLETED,
            total_rows=result.total_rows,
            accepted=len(records),
        )
        if not records:
            logger.warning(
                "Import of %s found no valid products in %d rows",
                session.source, result.total_rows,
            )
            report.outcome = ImportOutcome.NO_VALID_ROWS
            session.enter(ImportState.IDLE)
            return report

        session.enter(ImportState.PERSISTING)
        total = len(records)
        for start in range(0, total, self._chunk_size):
            chunk = records[start:start + self._chunk_size]
            try:
                self._product_repo.bulk_add(chunk)
            except StorageError as exc:
                logger.error(
                    "Chunk at offset %d of %s failed after %d of %d products were committed",
                    start, session.source, report.committed, total,
                )
                return self._fail(session, report, str(exc))

            report.committed += len(chunk)
            report.chunk_sizes.append(len(chunk))
            logger.debug("Committed chunk of %d products (%d/%d)",
                         len(chunk), report.committed, total)

            pct = compute_progress(report.committed, total)
            report.progress.append(pct)
            session.progress = pct
            if on_progress is not None:
                on_progress(pct)

            if report.committed < total:
                self._sleep(self._yield_delay)

        session.enter(ImportState.COMPLETE)
        logger.info("Imported %d products from %s", report.committed, session.source)
        return report

    @staticmethod
    def _fail(session: ImportSession, report: ImportReport, message: str) -> ImportReport:
        logger.error("Import of %s failed: %s", session.source, message)
        report.outcome = ImportOutcome.FAILED
        report.error = message
        session.enter(ImportState.FAILED)
        return report

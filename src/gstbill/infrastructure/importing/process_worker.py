"""Spreadsheet parsing in a separate process.

The worker process is started on the first request and reused until
``close()``.  A worker that dies is reported as a ParseFailure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool

from gstbill.application.catalog_parsing import (
    ParseFailure,
    ParseRequest,
    ParseResult,
    ParseWorker,
)
from gstbill.infrastructure.importing.sheet_reader import parse_catalog

logger = logging.getLogger("gstbill.import")


def _single_process_pool() -> Executor:
    return ProcessPoolExecutor(max_workers=1)


class ProcessParseWorker(ParseWorker):

    def __init__(self, executor_factory: Callable[[], Executor] = _single_process_pool) -> None:
        self._executor_factory = executor_factory
        self._executor: Executor | None = None

    def submit(self, request: ParseRequest) -> ParseResult:
        if self._executor is None:
            logger.debug("Starting spreadsheet parsing worker")
            self._executor = self._executor_factory()
        future = self._executor.submit(parse_catalog, request)
        try:
            return future.result()
        except BrokenProcessPool as exc:
            self.close()
            return ParseFailure(message=f"Parsing worker crashed: {exc}")
        except MemoryError:
            return ParseFailure(message="File is too large to parse")
        except Exception as exc:
            logger.error("Parsing %s failed", request.filename or "upload", exc_info=True)
            return ParseFailure(message=f"Unexpected error while parsing: {exc}")

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

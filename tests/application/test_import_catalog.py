"""Tests for the bulk catalog import pipeline.

Parsing is replaced by a fake worker so these tests exercise chunking,
progress, failure reporting and the single-session guard.
"""

import threading
from pathlib import Path

import pytest

from gstbill.application.catalog_parsing import (
    ParsedBatch,
    ParseFailure,
    ParseRequest,
    ParseWorker,
)
from gstbill.application.import_catalog import (
    BulkImportPipeline,
    ImportOutcome,
    ImportReport,
    compute_progress,
)
from gstbill.domain.exceptions import ImportInProgressError, ValidationError
from gstbill.domain.model.product import Product
from tests.fakes import FakeParseWorker, FakeProductRepository


def _batch(n: int, total_rows: int | None = None) -> ParsedBatch:
    records = [Product.create(name=f"Item {i}") for i in range(n)]
    return ParsedBatch(records=records, total_rows=n if total_rows is None else total_rows)


def _pipeline(result, repo=None, **kwargs):
    repo = repo if repo is not None else FakeProductRepository()
    sleeps: list[float] = []
    pipeline = BulkImportPipeline(
        repo, FakeParseWorker(result), sleep=sleeps.append, **kwargs
    )
    return pipeline, repo, sleeps


class BlockingParseWorker(ParseWorker):
    """Holds the request until the test releases it."""

    def __init__(self, result: ParsedBatch) -> None:
        self.result = result
        self.started = threading.Event()
        self.release = threading.Event()

    def submit(self, request: ParseRequest) -> ParsedBatch:
        self.started.set()
        self.release.wait(timeout=5)
        return self.result


class TestComputeProgress:

    @pytest.mark.parametrize("processed,total,expected", [
        (2000, 4500, 44),
        (4000, 4500, 89),
        (4500, 4500, 100),
        (1, 200, 1),
        (1, 3, 33),
        (1, 2, 50),
        (5, 4, 100),
    ])
    def test_rounds_half_up_and_caps(self, processed, total, expected):
        assert compute_progress(processed, total) == expected


class TestChunking:

    def test_4500_records(self):
        pipeline, repo, sleeps = _pipeline(_batch(4500))
        seen: list[int] = []

        report = pipeline.run(b"ignored", filename="stock.xlsx", on_progress=seen.append)

        assert report.outcome is ImportOutcome.COMPLETED
        assert repo.bulk_calls == [2000, 2000, 500]
        assert report.chunk_sizes == [2000, 2000, 500]
        assert report.progress == [44, 89, 100]
        assert seen == [44, 89, 100]
        assert repo.count() == 4500
        assert len(sleeps) == 2

    def test_exact_multiple_of_chunk_size(self):
        pipeline, repo, sleeps = _pipeline(_batch(4000))
        report = pipeline.run(b"x")
        assert repo.bulk_calls == [2000, 2000]
        assert report.progress == [50, 100]
        assert len(sleeps) == 1

    def test_small_file_single_chunk_no_pause(self):
        pipeline, repo, sleeps = _pipeline(_batch(3))
        report = pipeline.run(b"x")
        assert repo.bulk_calls == [3]
        assert report.progress == [100]
        assert sleeps == []

    def test_custom_chunk_size_and_delay(self):
        pipeline, repo, sleeps = _pipeline(_batch(5), chunk_size=2, yield_delay=0.5)
        pipeline.run(b"x")
        assert repo.bulk_calls == [2, 2, 1]
        assert sleeps == [0.5, 0.5]

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            BulkImportPipeline(FakeProductRepository(), FakeParseWorker(), chunk_size=0)

    def test_counts_are_conserved(self):
        pipeline, repo, _ = _pipeline(_batch(7, total_rows=10), chunk_size=3)
        report = pipeline.run(b"x")
        assert report.total_rows == 10
        assert report.accepted == 7
        assert report.rejected == 3
        assert report.committed == sum(repo.bulk_calls) == 7
        assert report.resume_offset is None


class TestEmptyAndFailedImports:

    def test_no_valid_rows(self):
        pipeline, repo, sleeps = _pipeline(_batch(0, total_rows=12))
        report = pipeline.run(b"x")
        assert report.outcome is ImportOutcome.NO_VALID_ROWS
        assert report.total_rows == 12
        assert repo.bulk_calls == []
        assert report.progress == []
        assert sleeps == []

    def test_parse_failure(self):
        pipeline, repo, _ = _pipeline(ParseFailure("File is not a valid spreadsheet"))
        report = pipeline.run(b"junk")
        assert report.outcome is ImportOutcome.FAILED
        assert report.error == "Failed to process the file: File is not a valid spreadsheet"
        assert repo.bulk_calls == []

    def test_failing_chunk_keeps_earlier_chunks(self):
        repo = FakeProductRepository(fail_on_bulk_call=2)
        pipeline, _, _ = _pipeline(_batch(4500), repo=repo)

        report = pipeline.run(b"x")

        assert report.outcome is ImportOutcome.FAILED
        assert report.error == "disk full"
        assert report.committed == 2000
        assert report.chunk_sizes == [2000]
        assert report.progress == [44]
        assert report.resume_offset == 2000
        assert repo.count() == 2000

    def test_unreadable_path(self, tmp_path):
        pipeline, repo, _ = _pipeline(_batch(1))
        report = pipeline.run(tmp_path / "missing.xlsx")
        assert report.outcome is ImportOutcome.FAILED
        assert "Could not read" in report.error
        assert repo.bulk_calls == []

    def test_resume_offset_only_on_partial_failure(self):
        report = ImportReport(ImportOutcome.FAILED, total_rows=5, accepted=5, committed=0)
        assert report.resume_offset == 0
        report = ImportReport(ImportOutcome.COMPLETED, total_rows=5, accepted=5, committed=5)
        assert report.resume_offset is None


class TestSources:

    def test_bytes_are_forwarded(self):
        worker = FakeParseWorker(_batch(1))
        BulkImportPipeline(FakeProductRepository(), worker, sleep=lambda _: None).run(
            b"raw", filename="upload.csv"
        )
        assert worker.requests == [ParseRequest(data=b"raw", filename="upload.csv")]

    def test_path_is_read(self, tmp_path: Path):
        path = tmp_path / "catalog.csv"
        path.write_bytes(b"Name\nA\n")
        worker = FakeParseWorker(_batch(1))
        BulkImportPipeline(FakeProductRepository(), worker, sleep=lambda _: None).run(path)
        assert worker.requests == [ParseRequest(data=b"Name\nA\n", filename="catalog.csv")]


class TestSingleSession:

    def test_second_start_is_rejected(self):
        worker = BlockingParseWorker(_batch(2))
        repo = FakeProductRepository()
        pipeline = BulkImportPipeline(repo, worker, sleep=lambda _: None)
        reports: list[ImportReport] = []

        first = threading.Thread(target=lambda: reports.append(pipeline.run(b"a", "one.xlsx")))
        first.start()
        assert worker.started.wait(timeout=5)
        try:
            assert pipeline.active_session is not None
            assert pipeline.active_session.source == "one.xlsx"
            with pytest.raises(ImportInProgressError, match="one.xlsx"):
                pipeline.run(b"b", "two.xlsx")
        finally:
            worker.release.set()
            first.join(timeout=5)

        assert reports[0].outcome is ImportOutcome.COMPLETED
        assert repo.count() == 2
        assert pipeline.active_session is None

    def test_pipeline_is_reusable_after_a_run(self):
        pipeline, repo, _ = _pipeline(_batch(2))
        pipeline.run(b"a")
        pipeline.run(b"b")
        assert repo.bulk_calls == [2, 2]

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from doc_factories import InMemoryDocuments, make_document

from docextract.exceptions import DocumentNotFoundError
from docextract.pipeline.models import ExtractionStatus
from docextract.pipeline.status_tracker import StatusTracker

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _make_tracker(documents: InMemoryDocuments) -> StatusTracker:
    return StatusTracker(documents, clock=lambda: NOW)  # type: ignore[arg-type]


class TestSetStatus:
    def test_merges_patch_without_touching_other_fields(
        self, documents: InMemoryDocuments
    ) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)

        tracker.set_status("user-1", "doc-1", {"status": "processing", "started_at": "t0"})
        tracker.set_status("user-1", "doc-1", {"raw_text_length": 5})

        assert documents.content("user-1", "doc-1") == {
            "status": "processing",
            "started_at": "t0",
            "raw_text_length": 5,
        }
        assert documents.find_by_key("user-1", "doc-1").name == "Catalog 1962"

    def test_identical_patch_twice_equals_once(self, documents: InMemoryDocuments) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)
        patch = {"status": "completed", "text": "abc"}

        tracker.set_status("user-1", "doc-1", patch)
        once = dict(documents.content("user-1", "doc-1"))
        tracker.set_status("user-1", "doc-1", patch)

        assert documents.content("user-1", "doc-1") == once

    def test_passes_correlation_key_to_repository(self) -> None:
        repo = MagicMock()
        tracker = StatusTracker(repo, clock=lambda: NOW)

        tracker.set_status("u", "d", {"status": "processing"}, correlation_key="job-1")

        repo.update_extracted_content.assert_called_once_with(
            "u", "d", {"status": "processing"}, job_id="job-1"
        )

    def test_missing_document_propagates(self, documents: InMemoryDocuments) -> None:
        tracker = _make_tracker(documents)
        with pytest.raises(DocumentNotFoundError):
            tracker.set_status("user-1", "nope", {"status": "failed"})


class TestTransitions:
    def test_processing_sets_started_at_and_correlation_key(
        self, documents: InMemoryDocuments
    ) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)

        tracker.mark_processing("user-1", "doc-1", correlation_key="job-9")

        document = documents.find_by_key("user-1", "doc-1")
        assert document.correlation_key == "job-9"
        assert document.extracted_content.status is ExtractionStatus.PROCESSING
        assert document.extracted_content.started_at == NOW.isoformat()

    def test_completed_after_failed_attempt_clears_error(
        self, documents: InMemoryDocuments
    ) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)

        tracker.mark_processing("user-1", "doc-1")
        tracker.mark_failed("user-1", "doc-1", "boom")
        tracker.mark_processing("user-1", "doc-1")
        tracker.mark_completed("user-1", "doc-1", text="ok", raw_text_length=2)

        content = documents.find_by_key("user-1", "doc-1").extracted_content
        assert content.status is ExtractionStatus.COMPLETED
        assert content.error is None
        assert content.completed_at is None
        assert content.text == "ok"
        assert content.raw_text_length == 2
        assert content.extracted_at == NOW.isoformat()

    def test_failed_records_error_and_completed_at(self, documents: InMemoryDocuments) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)

        tracker.mark_failed("user-1", "doc-1", "Unsupported content type: application/zip")

        content = documents.find_by_key("user-1", "doc-1").extracted_content
        assert content.status is ExtractionStatus.FAILED
        assert content.error == "Unsupported content type: application/zip"
        assert content.completed_at == NOW.isoformat()
        assert content.text is None

    def test_failed_after_completed_run_clears_previous_result(
        self, documents: InMemoryDocuments
    ) -> None:
        documents.add(make_document())
        tracker = _make_tracker(documents)
        tracker.mark_processing("user-1", "doc-1", correlation_key="job-1")
        tracker.mark_completed("user-1", "doc-1", text="old", raw_text_length=42)

        tracker.mark_failed("user-1", "doc-1", "Object not found")

        content = documents.find_by_key("user-1", "doc-1").extracted_content
        assert content.status is ExtractionStatus.FAILED
        assert content.text is None
        assert content.raw_text_length is None
        assert content.extracted_at is None

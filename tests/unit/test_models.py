import pytest

from docextract.pipeline.models import (
    BatchResult,
    ExtractedContent,
    ExtractionOutcome,
    ExtractionStatus,
)


class TestExtractedContent:
    def test_empty_reads_as_pending(self) -> None:
        assert ExtractedContent.from_dict(None).status is ExtractionStatus.PENDING
        assert ExtractedContent.from_dict({}).status is ExtractionStatus.PENDING

    def test_reads_stored_fields(self) -> None:
        content = ExtractedContent.from_dict(
            {"status": "completed", "text": "t", "raw_text_length": 1, "error": None}
        )
        assert content.status is ExtractionStatus.COMPLETED
        assert content.text == "t"
        assert content.raw_text_length == 1
        assert content.error is None

    def test_unknown_status_raises(self) -> None:
        with pytest.raises(ValueError):
            ExtractedContent.from_dict({"status": "exploded"})

    def test_terminal_statuses(self) -> None:
        assert ExtractionStatus.COMPLETED.is_terminal
        assert ExtractionStatus.FAILED.is_terminal
        assert not ExtractionStatus.PROCESSING.is_terminal
        assert not ExtractionStatus.PENDING.is_terminal


class TestBatchResult:
    def test_outcome_omits_unset_fields(self) -> None:
        outcome = ExtractionOutcome(document_id="d", status="completed", text_length=0)
        assert outcome.to_dict() == {"document_id": "d", "status": "completed", "text_length": 0}

    def test_shape(self) -> None:
        batch = BatchResult()
        batch.add_success("m-1", ExtractionOutcome(document_id="d", status="processing"))
        assert batch.to_dict() == {
            "batchItemFailures": [],
            "results": [
                {
                    "itemId": "m-1",
                    "status": "success",
                    "result": {"document_id": "d", "status": "processing"},
                }
            ],
        }


class TestStatusRecorded:
    def test_never_extracted_has_no_recorded_status(self) -> None:
        assert not ExtractedContent.from_dict({}).status_recorded
        assert not ExtractedContent.from_dict({"text": None}).status_recorded

    def test_explicit_pending_is_recorded(self) -> None:
        content = ExtractedContent.from_dict({"status": "pending"})
        assert content.status is ExtractionStatus.PENDING
        assert content.status_recorded

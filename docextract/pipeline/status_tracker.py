from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from docextract.database.repositories.documents_repository import DocumentsRepository
from docextract.logging.logger import Log
from docextract.pipeline.models import ExtractionStatus

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StatusTracker:
    """Writes extraction state onto document records.

    Every write is a partial merge into extracted_content; replaying the same
    patch leaves the record unchanged. Transition order is the callers' job.
    Fields that do not belong to the new state are written as null.
    """

    def __init__(self, documents: DocumentsRepository, clock: Clock = _utc_now) -> None:
        self._documents = documents
        self._clock = clock

    def set_status(
        self,
        owner_id: str,
        document_id: str,
        patch: dict[str, Any],
        correlation_key: str | None = None,
    ) -> None:
        self._documents.update_extracted_content(
            owner_id, document_id, patch, job_id=correlation_key
        )
        Log.debug(f"Document {document_id} extraction state updated: {patch.get('status')}")

    def mark_processing(
        self,
        owner_id: str,
        document_id: str,
        correlation_key: str | None = None,
    ) -> None:
        self.set_status(
            owner_id,
            document_id,
            {
                "status": ExtractionStatus.PROCESSING.value,
                "started_at": self._now(),
                "text": None,
                "description": None,
                "error": None,
                "extracted_at": None,
                "completed_at": None,
                "raw_text_length": None,
            },
            correlation_key=correlation_key,
        )

    def mark_completed(
        self,
        owner_id: str,
        document_id: str,
        *,
        text: str,
        description: str | None = None,
        raw_text_length: int | None = None,
    ) -> None:
        self.set_status(
            owner_id,
            document_id,
            {
                "status": ExtractionStatus.COMPLETED.value,
                "text": text,
                "description": description,
                "raw_text_length": raw_text_length,
                "error": None,
                "extracted_at": self._now(),
            },
        )

    def mark_failed(self, owner_id: str, document_id: str, error: str) -> None:
        self.set_status(
            owner_id,
            document_id,
            {
                "status": ExtractionStatus.FAILED.value,
                "error": error,
                "text": None,
                "description": None,
                "extracted_at": None,
                "raw_text_length": None,
                "completed_at": self._now(),
            },
        )

    def _now(self) -> str:
        return self._clock().isoformat()

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExtractionStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExtractionStatus.COMPLETED, ExtractionStatus.FAILED)


@dataclass(frozen=True)
class ExtractedContent:
    """Nested extraction state stored on a document record."""

    status: ExtractionStatus = ExtractionStatus.PENDING
    text: str | None = None
    description: str | None = None
    error: str | None = None
    started_at: str | None = None
    extracted_at: str | None = None
    completed_at: str | None = None
    raw_text_length: int | None = None
    status_recorded: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "ExtractedContent":
        """Build from the stored JSON object. Missing or null status means pending.

        `status_recorded` tells an explicitly queued (`pending`) record apart
        from one that was never extracted.
        """
        if not raw:
            return cls()
        status = raw.get("status") or ExtractionStatus.PENDING.value
        return cls(
            status=ExtractionStatus(status),
            text=raw.get("text"),
            description=raw.get("description"),
            error=raw.get("error"),
            started_at=raw.get("started_at"),
            extracted_at=raw.get("extracted_at"),
            completed_at=raw.get("completed_at"),
            raw_text_length=raw.get("raw_text_length"),
            status_recorded=bool(raw.get("status")),
        )


@dataclass(frozen=True)
class Document:
    """Domain model for an uploaded document (subset of DB columns)."""

    owner_id: str
    document_id: str
    name: str
    source_ref: str
    content_type: str
    kind: str
    correlation_key: str | None = None
    extracted_content: ExtractedContent = field(default_factory=ExtractedContent)


@dataclass(frozen=True)
class ImageAnalysis:
    """Text and description returned by the image pipeline."""

    text: str
    description: str


@dataclass
class ExtractionOutcome:
    """Per-item result reported back in the batch result."""

    document_id: str
    status: str
    pipeline: str | None = None
    job_id: str | None = None
    text_length: int | None = None
    raw_text_length: int | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {key: value for key, value in self.__dict__.items() if value is not None}


@dataclass
class BatchResult:
    """Aggregated dispatcher output for one batch of trigger events."""

    results: list[dict[str, object]] = field(default_factory=list)
    batch_item_failures: list[dict[str, str]] = field(default_factory=list)

    def add_success(self, item_id: str, outcome: ExtractionOutcome) -> None:
        self.results.append(
            {"itemId": item_id, "status": "success", "result": outcome.to_dict()}
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "batchItemFailures": list(self.batch_item_failures),
            "results": list(self.results),
        }

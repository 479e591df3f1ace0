from dataclasses import dataclass, field
from typing import Any

LINE_BLOCK = "LINE"


@dataclass(frozen=True)
class OcrBlock:
    """One block of OCR output (PAGE, LINE, WORD, ...)."""

    block_type: str
    text: str = ""
    page: int = 1


@dataclass(frozen=True)
class OcrPage:
    """One page of paginated job results; next_token is None on the last page."""

    blocks: list[OcrBlock] = field(default_factory=list)
    next_token: str | None = None


@dataclass(frozen=True)
class NotificationChannel:
    """Where the OCR service publishes completion, and the role allowed to publish."""

    topic_arn: str
    role_arn: str


@dataclass(frozen=True)
class JobCompletion:
    """Completion signal for an OCR job. Carries only the job id, never the document key."""

    job_id: str
    status: str
    location: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.status.upper() == "FAILED"

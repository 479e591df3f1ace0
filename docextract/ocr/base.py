from abc import ABC, abstractmethod

from docextract.ocr.models import NotificationChannel, OcrPage


class BaseOcrJobClient(ABC):
    """Contract for asynchronous OCR job services."""

    @abstractmethod
    def submit(self, storage_key: str, channel: NotificationChannel) -> str:
        """Start a text-detection job for a stored object and return its job id.

        Completion is published to `channel`; this call does not wait for it.

        Raises:
            OcrServiceError: if the job cannot be submitted.
        """

    @abstractmethod
    def fetch_page(self, job_id: str, next_token: str | None = None) -> OcrPage:
        """Return one page of job results, starting at `next_token`.

        Raises:
            OcrServiceError: if results cannot be read.
        """

    def release(self, job_id: str) -> None:
        """Called once the job id is stored on the document.

        Engines that finish inside `submit` publish their completion here, so
        the completion can always be resolved back to its document.
        """

    def discard(self, job_id: str) -> None:
        """Called after the job's terminal status has been written."""

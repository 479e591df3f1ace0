"""OCR job client for local development.

Runs text extraction in-process with pdfplumber at submit time and keeps the
resulting blocks in memory until the job's outcome has been recorded. The
completion is published through the given publisher (normally the event
queue) on `release`, after the document carries the job id, so a later batch
handles it exactly like a Textract SNS notification.

Results live in this process only: the completion must be handled by the
worker that submitted the job.
"""

import io
import uuid
from collections.abc import Callable

import pdfplumber

from docextract.exceptions import OcrServiceError
from docextract.logging.logger import Log
from docextract.ocr.base import BaseOcrJobClient
from docextract.ocr.models import (
    LINE_BLOCK,
    JobCompletion,
    NotificationChannel,
    OcrBlock,
    OcrPage,
)
from docextract.storage.base import BaseObjectStorage

CompletionPublisher = Callable[[JobCompletion], object]


class LocalOcrJobClient(BaseOcrJobClient):
    def __init__(
        self,
        storage: BaseObjectStorage,
        publisher: CompletionPublisher,
        page_size: int = 1000,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._storage = storage
        self._publisher = publisher
        self._page_size = page_size
        self._results: dict[str, list[OcrBlock]] = {}
        self._unpublished: dict[str, JobCompletion] = {}

    def submit(self, storage_key: str, channel: NotificationChannel) -> str:
        _ = channel
        job_id = f"local-{uuid.uuid4()}"
        stored = self._storage.fetch(storage_key)
        try:
            self._results[job_id] = self._extract_blocks(stored.body)
            status = "SUCCEEDED"
        except Exception as exc:
            Log.error(f"Local OCR job {job_id} failed: {exc}")
            status = "FAILED"
        self._unpublished[job_id] = JobCompletion(
            job_id=job_id,
            status=status,
            location=self._storage.location(storage_key),
        )
        Log.info(f"Local OCR job {job_id} finished with status {status}")
        return job_id

    def release(self, job_id: str) -> None:
        completion = self._unpublished.pop(job_id, None)
        if completion is None:
            raise OcrServiceError(f"Unknown local OCR job: {job_id}")
        self._publisher(completion)

    def discard(self, job_id: str) -> None:
        self._results.pop(job_id, None)
        self._unpublished.pop(job_id, None)

    def fetch_page(self, job_id: str, next_token: str | None = None) -> OcrPage:
        blocks = self._results.get(job_id)
        if blocks is None:
            raise OcrServiceError(f"Unknown local OCR job: {job_id}")
        try:
            start = int(next_token) if next_token else 0
        except ValueError as exc:
            raise OcrServiceError(f"Invalid next token: {next_token}") from exc
        end = start + self._page_size
        return OcrPage(
            blocks=blocks[start:end],
            next_token=str(end) if end < len(blocks) else None,
        )

    @staticmethod
    def _extract_blocks(pdf_bytes: bytes) -> list[OcrBlock]:
        blocks: list[OcrBlock] = []
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                blocks.append(OcrBlock(block_type="PAGE", page=number))
                text = page.extract_text() or ""
                for line in text.splitlines():
                    if line.strip():
                        blocks.append(OcrBlock(block_type=LINE_BLOCK, text=line, page=number))
        return blocks

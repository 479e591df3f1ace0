"""Asynchronous PDF extraction.

The start phase submits an OCR job and records its id on the document; the
completion phase runs later, when the OCR service reports back with only the
job id, and finds the document again through the correlation resolver.
"""

from docextract.inference.reconstructor import TextReconstructor
from docextract.logging.logger import Log
from docextract.ocr.base import BaseOcrJobClient
from docextract.ocr.models import JobCompletion, NotificationChannel
from docextract.ocr.reader import read_line_text
from docextract.pipeline.correlation import CorrelationResolver
from docextract.pipeline.models import Document, ExtractionOutcome, ExtractionStatus
from docextract.pipeline.status_tracker import StatusTracker
from docextract.storage.references import resolve_storage_key

OCR_JOB_FAILED_ERROR = "OCR job failed"


class DocumentPipeline:
    def __init__(
        self,
        ocr_client: BaseOcrJobClient,
        channel: NotificationChannel,
        reconstructor: TextReconstructor,
        tracker: StatusTracker,
        resolver: CorrelationResolver,
    ) -> None:
        self._ocr_client = ocr_client
        self._channel = channel
        self._reconstructor = reconstructor
        self._tracker = tracker
        self._resolver = resolver

    def start(self, document: Document) -> str:
        """Submit the OCR job, store its id as the correlation key, mark processing.

        The OCR client is released only after the id is stored, so a completion
        can never arrive before its document is findable by job id.
        """
        key = resolve_storage_key(document.source_ref)
        job_id = self._ocr_client.submit(key, self._channel)
        self._tracker.mark_processing(
            document.owner_id,
            document.document_id,
            correlation_key=job_id,
        )
        self._ocr_client.release(job_id)
        Log.info(f"PDF extraction started for document {document.document_id}: job {job_id}")
        return job_id

    def complete(self, completion: JobCompletion) -> ExtractionOutcome:
        """Finish a job reported by the OCR service.

        Raises:
            DocumentNotFoundError: if no document references the job.
        """
        document = self._resolver.resolve(completion.job_id)
        owner_id, document_id = document.owner_id, document.document_id

        if completion.failed:
            Log.error(f"OCR job {completion.job_id} failed for document {document_id}")
            self._tracker.mark_failed(owner_id, document_id, OCR_JOB_FAILED_ERROR)
            self._ocr_client.discard(completion.job_id)
            return ExtractionOutcome(
                document_id=document_id,
                status=ExtractionStatus.FAILED.value,
                pipeline="pdf",
                job_id=completion.job_id,
            )

        raw_text = read_line_text(self._ocr_client, completion.job_id)

        if not raw_text.strip():
            Log.warning(
                f"OCR returned empty text for document {document_id} (job {completion.job_id})"
            )
            self._tracker.mark_completed(owner_id, document_id, text="", raw_text_length=0)
            self._ocr_client.discard(completion.job_id)
            return ExtractionOutcome(
                document_id=document_id,
                status=ExtractionStatus.COMPLETED.value,
                pipeline="pdf",
                job_id=completion.job_id,
                text_length=0,
                raw_text_length=0,
            )

        text = self._reconstructor.reconstruct(raw_text, document.name)
        self._tracker.mark_completed(
            owner_id,
            document_id,
            text=text,
            raw_text_length=len(raw_text),
        )
        self._ocr_client.discard(completion.job_id)
        Log.info(
            f"PDF extraction completed for document {document_id}: "
            f"{len(text)} chars from {len(raw_text)} raw chars"
        )
        return ExtractionOutcome(
            document_id=document_id,
            status=ExtractionStatus.COMPLETED.value,
            pipeline="pdf",
            job_id=completion.job_id,
            text_length=len(text),
            raw_text_length=len(raw_text),
        )

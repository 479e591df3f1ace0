from docextract.config.settings import Settings
from docextract.database.repositories.documents_repository import DocumentsRepository
from docextract.exceptions import (
    NotFoundError,
    ObjectNotFoundError,
    ReferenceFormatError,
    UnsupportedContentError,
)
from docextract.inference.factory import InferenceFactory
from docextract.logging.logger import Log
from docextract.ocr.factory import OcrJobClientFactory
from docextract.ocr.local_adapter import CompletionPublisher
from docextract.pipeline.classifier import ContentKind, classify
from docextract.pipeline.correlation import CorrelationResolver
from docextract.pipeline.document_pipeline import DocumentPipeline
from docextract.pipeline.image_pipeline import ImagePipeline
from docextract.pipeline.models import (
    BatchResult,
    Document,
    ExtractionOutcome,
    ExtractionStatus,
)
from docextract.pipeline.status_tracker import StatusTracker
from docextract.pipeline.triggers import (
    NewDocumentTrigger,
    TriggerEvent,
    TriggerSource,
    parse_completion,
    parse_new_document,
)
from docextract.storage.factory import StorageFactory


class Dispatcher:
    """Routes a batch of trigger events to the extraction pipelines.

    Items run one at a time. Business outcomes (unsupported type, failed OCR
    job, missing document) are recorded and reported; any other exception is
    logged with the item id and re-raised so the delivery layer redelivers the
    batch.
    """

    def __init__(
        self,
        documents: DocumentsRepository,
        tracker: StatusTracker,
        image_pipeline: ImagePipeline,
        document_pipeline: DocumentPipeline,
    ) -> None:
        self._documents = documents
        self._tracker = tracker
        self._image_pipeline = image_pipeline
        self._document_pipeline = document_pipeline

    def dispatch(self, events: list[TriggerEvent]) -> BatchResult:
        Log.info(f"Dispatching batch of {len(events)} trigger events")
        batch = BatchResult()
        for event in events:
            try:
                outcome = self._dispatch_one(event)
            except Exception as exc:
                Log.exception(
                    f"Failed to process trigger {event.item_id} ({event.source.value}): {exc}"
                )
                raise
            batch.add_success(event.item_id, outcome)
        return batch

    def _dispatch_one(self, event: TriggerEvent) -> ExtractionOutcome:
        if event.source is TriggerSource.NOTIFICATION:
            completion = parse_completion(event.payload)
            Log.info(f"Processing OCR completion: job {completion.job_id} ({completion.status})")
            try:
                return self._document_pipeline.complete(completion)
            except NotFoundError as exc:
                Log.error(f"Document not found for OCR job {completion.job_id}")
                return ExtractionOutcome(
                    document_id="",
                    status="skipped",
                    job_id=completion.job_id,
                    reason=str(exc),
                )

        trigger = parse_new_document(event.payload)
        Log.info(
            f"Processing extraction request: owner {trigger.owner_id}, "
            f"document {trigger.document_id}"
        )
        return self.handle_new_document(trigger)

    def handle_new_document(self, trigger: NewDocumentTrigger) -> ExtractionOutcome:
        try:
            document = self._documents.find_by_key(trigger.owner_id, trigger.document_id)
        except NotFoundError as exc:
            Log.error(f"Document {trigger.document_id} not found, skipping")
            return ExtractionOutcome(
                document_id=trigger.document_id,
                status="skipped",
                reason=str(exc),
            )

        kind = classify(document.content_type, document.kind)
        Log.info(
            f"Document {document.document_id} classified as {kind.value} "
            f"(content type '{document.content_type}', type '{document.kind}')"
        )
        try:
            if kind is ContentKind.PDF:
                return self._start_document_job(document)
            if kind is ContentKind.IMAGE:
                return self._process_image(document)
            raise UnsupportedContentError(document.content_type)
        except UnsupportedContentError as exc:
            self._tracker.mark_failed(document.owner_id, document.document_id, str(exc))
            return ExtractionOutcome(
                document_id=document.document_id,
                status="skipped",
                reason="Unsupported content type",
            )

    def _start_document_job(self, document: Document) -> ExtractionOutcome:
        try:
            job_id = self._document_pipeline.start(document)
        except (ReferenceFormatError, ObjectNotFoundError) as exc:
            self._tracker.mark_failed(document.owner_id, document.document_id, str(exc))
            raise
        return ExtractionOutcome(
            document_id=document.document_id,
            status=ExtractionStatus.PROCESSING.value,
            pipeline="pdf-async",
            job_id=job_id,
        )

    def _process_image(self, document: Document) -> ExtractionOutcome:
        self._tracker.mark_processing(document.owner_id, document.document_id)
        try:
            analysis = self._image_pipeline.process(document)
        except Exception as exc:
            self._tracker.mark_failed(document.owner_id, document.document_id, str(exc))
            raise
        self._tracker.mark_completed(
            document.owner_id,
            document.document_id,
            text=analysis.text,
            description=analysis.description,
        )
        return ExtractionOutcome(
            document_id=document.document_id,
            status=ExtractionStatus.COMPLETED.value,
            pipeline="image",
            text_length=len(analysis.text),
        )


def build_dispatcher(settings: Settings, publisher: CompletionPublisher) -> Dispatcher:
    """Build a Dispatcher with all required adapters.

    `publisher` receives completions from OCR engines that run in-process.
    """
    documents = DocumentsRepository()
    tracker = StatusTracker(documents)
    storage = StorageFactory.create(settings)
    analyzer, reconstructor = InferenceFactory.create(settings)
    ocr_client = OcrJobClientFactory.create(settings, storage, publisher)
    document_pipeline = DocumentPipeline(
        ocr_client=ocr_client,
        channel=OcrJobClientFactory.notification_channel(settings),
        reconstructor=reconstructor,
        tracker=tracker,
        resolver=CorrelationResolver(documents),
    )
    return Dispatcher(
        documents=documents,
        tracker=tracker,
        image_pipeline=ImagePipeline(storage, analyzer),
        document_pipeline=document_pipeline,
    )

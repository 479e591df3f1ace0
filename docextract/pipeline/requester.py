from docextract.database.repositories.documents_repository import DocumentsRepository
from docextract.database.repositories.event_queue_repository import EventQueueRepository
from docextract.exceptions import ExtractionInProgressError
from docextract.logging.logger import Log


class ExtractionRequester:
    """Queues a new-document trigger for a document that is not already queued or running."""

    def __init__(self, documents: DocumentsRepository, events: EventQueueRepository) -> None:
        self._documents = documents
        self._events = events

    def request(self, owner_id: str, document_id: str) -> int:
        """Enqueue extraction and return the event id.

        Documents never extracted, completed or failed may be requested. A
        recorded `pending` or `processing` status is refused.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            ExtractionInProgressError: if extraction is already queued or processing.
        """
        document = self._documents.find_by_key(owner_id, document_id)
        content = document.extracted_content
        if content.status_recorded and not content.status.is_terminal:
            raise ExtractionInProgressError(f"Extraction already {content.status.value}")
        event_id = self._events.enqueue_new_document(owner_id, document_id, origin="manual")
        Log.info(f"Triggered extraction for document {document_id} (event {event_id})")
        return event_id

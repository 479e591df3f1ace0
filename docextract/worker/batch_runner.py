from docextract.config.settings import Settings
from docextract.database.models import EventRecord
from docextract.database.repositories.event_queue_repository import EventQueueRepository
from docextract.logging.logger import Log
from docextract.pipeline.dispatcher import Dispatcher
from docextract.pipeline.models import BatchResult
from docextract.pipeline.triggers import TriggerEvent, TriggerSource


def to_trigger_event(event: EventRecord) -> TriggerEvent:
    return TriggerEvent(
        item_id=str(event.id),
        source=TriggerSource(event.source),
        payload=event.payload,
    )


class BatchRunner:
    """Run one batch of events, catch exceptions, and apply retry logic."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        event_repo: EventQueueRepository,
        settings: Settings,
    ) -> None:
        self._dispatcher = dispatcher
        self._event_repo = event_repo
        self._settings = settings

    def run(self, events: list[EventRecord]) -> BatchResult | None:
        """Dispatch a batch; returns the batch result, or None if the batch failed."""
        event_ids = [event.id for event in events]
        Log.info(f"Running batch of {len(events)} events: {event_ids}")
        try:
            result = self._dispatcher.dispatch([to_trigger_event(e) for e in events])
        except Exception as exc:
            self._handle_failure(events, exc)
            return None
        self._event_repo.mark_done(event_ids)
        Log.info(f"Batch {event_ids} completed successfully")
        return result

    def _handle_failure(self, events: list[EventRecord], exc: Exception) -> None:
        """Dead-letter events at max attempts; return the rest to pending."""
        Log.error(f"Batch failed: {exc}")
        max_attempts = self._settings.max_event_attempts
        exhausted = [e.id for e in events if e.attempts + 1 >= max_attempts]
        retryable = [e.id for e in events if e.attempts + 1 < max_attempts]
        if exhausted:
            self._event_repo.mark_failed(exhausted, str(exc))
            Log.error(f"Events {exhausted} permanently failed after {max_attempts} attempts")
        if retryable:
            self._event_repo.increment_attempts(retryable, str(exc))
            Log.warning(f"Events {retryable} will be retried")

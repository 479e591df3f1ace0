"""Batch entry point for SQS extraction requests and SNS OCR completions."""

from typing import Any

from docextract.config.settings import Settings
from docextract.database.connection import init_pool
from docextract.database.repositories.event_queue_repository import EventQueueRepository
from docextract.exceptions import TriggerFormatError
from docextract.logging.logger import Log
from docextract.pipeline.dispatcher import Dispatcher, build_dispatcher
from docextract.pipeline.triggers import TriggerEvent, from_lambda_record

_dispatcher: Dispatcher | None = None


def _get_dispatcher() -> Dispatcher:
    """Build the dispatcher once per process and reuse it across invocations."""
    global _dispatcher  # noqa: PLW0603
    if _dispatcher is None:
        settings = Settings()
        Log.configure(settings.log_level)
        init_pool(settings)
        event_repo = EventQueueRepository(settings.max_event_attempts)
        _dispatcher = build_dispatcher(settings, publisher=event_repo.enqueue_completion)
    return _dispatcher


def _to_trigger(record: dict[str, Any]) -> TriggerEvent:
    try:
        return from_lambda_record(record)
    except TriggerFormatError as exc:
        record_id = record.get("messageId") or (record.get("Sns") or {}).get("MessageId")
        Log.error(f"Malformed trigger record {record_id}: {exc}")
        raise


def handler(event: dict[str, Any], context: Any = None) -> dict[str, object]:
    records = event.get("Records") or []
    Log.info(f"Document extraction handler invoked with {len(records)} records")
    triggers = [_to_trigger(record) for record in records]
    return _get_dispatcher().dispatch(triggers).to_dict()

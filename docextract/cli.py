"""Operator commands for the extraction worker."""

import click

from docextract.config.settings import Settings
from docextract.database.connection import close_pool, init_pool
from docextract.database.repositories.documents_repository import DocumentsRepository
from docextract.database.repositories.event_queue_repository import EventQueueRepository
from docextract.exceptions import DocumentNotFoundError, ExtractionInProgressError
from docextract.logging.logger import Log
from docextract.pipeline.requester import ExtractionRequester


@click.group()
def cli() -> None:
    """Document extraction commands.

    \b
      docextract request <owner_id> <document_id>   Queue extraction for a document
    """


@cli.command("request")
@click.argument("owner_id")
@click.argument("document_id")
def request_extraction(owner_id: str, document_id: str) -> None:
    """Queue extraction for one document.

    Refused while the document is already queued or processing.
    """
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    try:
        requester = ExtractionRequester(
            DocumentsRepository(),
            EventQueueRepository(settings.max_event_attempts),
        )
        try:
            event_id = requester.request(owner_id, document_id)
        except (DocumentNotFoundError, ExtractionInProgressError) as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Queued extraction for document {document_id} (event {event_id})")
    finally:
        close_pool()

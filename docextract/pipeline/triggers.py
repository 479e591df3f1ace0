"""Inbound trigger envelopes and their parsers.

A trigger is routed by the envelope's source tag, never by payload shape:
``queue`` carries a new-document request, ``notification`` carries an OCR job
completion.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from docextract.exceptions import TriggerFormatError
from docextract.ocr.models import JobCompletion

SNS_EVENT_SOURCE = "aws:sns"


class TriggerSource(str, Enum):
    QUEUE = "queue"
    NOTIFICATION = "notification"


@dataclass(frozen=True)
class TriggerEvent:
    item_id: str
    source: TriggerSource
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NewDocumentTrigger:
    owner_id: str
    document_id: str


def parse_new_document(payload: dict[str, Any]) -> NewDocumentTrigger:
    owner_id = payload.get("owner_id")
    document_id = payload.get("document_id")
    if not owner_id or not document_id:
        raise TriggerFormatError("Missing required fields: owner_id, document_id")
    return NewDocumentTrigger(owner_id=str(owner_id), document_id=str(document_id))


def parse_completion(payload: dict[str, Any]) -> JobCompletion:
    job_id = payload.get("job_id")
    status = payload.get("status")
    if not job_id or not status:
        raise TriggerFormatError("Missing required fields: job_id, status")
    location = payload.get("location") or {}
    return JobCompletion(job_id=str(job_id), status=str(status), location=dict(location))


def from_lambda_record(record: dict[str, Any]) -> TriggerEvent:
    """Convert an SQS or SNS Lambda record into a TriggerEvent.

    SNS records carry the Textract completion message (JobId, Status,
    DocumentLocation); anything else is treated as an SQS message whose body
    names the document (userId, documentId).
    """
    event_source = record.get("EventSource") or record.get("eventSource")
    try:
        if event_source == SNS_EVENT_SOURCE:
            sns = record["Sns"]
            message = json.loads(sns["Message"])
            return TriggerEvent(
                item_id=sns.get("MessageId", ""),
                source=TriggerSource.NOTIFICATION,
                payload={
                    "job_id": message.get("JobId"),
                    "status": message.get("Status"),
                    "location": message.get("DocumentLocation") or {},
                },
            )
        body = json.loads(record["body"])
    except (KeyError, TypeError, json.JSONDecodeError) as exc:
        raise TriggerFormatError(f"Malformed trigger record: {exc}") from exc

    return TriggerEvent(
        item_id=record.get("messageId", ""),
        source=TriggerSource.QUEUE,
        payload={
            "owner_id": body.get("userId") or body.get("owner_id"),
            "document_id": body.get("documentId") or body.get("document_id"),
            "origin": body.get("source") or body.get("origin"),
        },
    )

class ExtractionError(Exception):
    """Base exception for all extraction-related errors."""


class ReferenceFormatError(ExtractionError):
    """Raised when a document's source reference cannot be mapped to a storage key."""


class NotFoundError(ExtractionError):
    """Raised when a required record or object does not exist."""


class DocumentNotFoundError(NotFoundError):
    """Raised when a document record cannot be found in the database."""


class ObjectNotFoundError(NotFoundError):
    """Raised when the uploaded bytes are missing from object storage."""


class UnsupportedContentError(ExtractionError):
    """Raised when a document's content type has no extraction pipeline."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unsupported content type: {content_type}")
        self.content_type = content_type


class TriggerFormatError(ExtractionError):
    """Raised when a trigger payload is missing required fields."""


class ExtractionInProgressError(ExtractionError):
    """Raised when extraction is requested while one is already queued or processing."""


class UpstreamServiceError(ExtractionError):
    """Raised when an external service call fails. Safe to retry by redelivery."""


class StorageError(UpstreamServiceError):
    """Raised when object storage cannot be reached or returns an error."""


class OcrServiceError(UpstreamServiceError):
    """Raised when submitting or reading an OCR job fails."""


class InferenceError(UpstreamServiceError):
    """Raised when the inference provider returns an unusable response."""


class InferenceNetworkError(InferenceError):
    """Raised when the inference call fails due to network/infrastructure issues."""

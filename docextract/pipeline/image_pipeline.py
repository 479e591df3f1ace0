from docextract.inference.image_analyzer import ImageAnalyzer
from docextract.logging.logger import Log
from docextract.pipeline.models import Document, ImageAnalysis
from docextract.storage.base import BaseObjectStorage
from docextract.storage.references import resolve_storage_key

DEFAULT_MEDIA_TYPE = "image/jpeg"

_MEDIA_TYPES = {
    "image/jpeg": "image/jpeg",
    "image/jpg": "image/jpeg",
    "image/png": "image/png",
    "image/gif": "image/gif",
    "image/webp": "image/webp",
}


def normalize_media_type(content_type: str | None) -> str:
    """Map a stored content type to one the vision model accepts; JPEG otherwise."""
    return _MEDIA_TYPES.get((content_type or "").lower(), DEFAULT_MEDIA_TYPE)


class ImagePipeline:
    """Synchronous extraction for images: fetch bytes, ask the vision model, parse.

    Never writes the document record; the caller persists the outcome.
    """

    def __init__(self, storage: BaseObjectStorage, analyzer: ImageAnalyzer) -> None:
        self._storage = storage
        self._analyzer = analyzer

    def process(self, document: Document) -> ImageAnalysis:
        key = resolve_storage_key(document.source_ref)
        stored = self._storage.fetch(key)
        media_type = normalize_media_type(stored.content_type)
        Log.info(
            f"Sending image for document {document.document_id} to inference "
            f"({media_type}, {len(stored.body)} bytes)"
        )
        analysis = self._analyzer.analyze(stored.body, media_type, document.name)
        Log.info(
            f"Image extraction complete for document {document.document_id}: "
            f"{len(analysis.text)} text chars, {len(analysis.description)} description chars"
        )
        return analysis

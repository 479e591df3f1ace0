from enum import Enum

PDF_CONTENT_TYPE = "application/pdf"


class ContentKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


def classify(content_type: str | None, kind: str | None) -> ContentKind:
    """Pick the extraction branch from the declared content type and kind hint.

    PDF wins when both PDF and image rules match.
    """
    content_type = content_type or ""
    if content_type == PDF_CONTENT_TYPE or kind == "pdf":
        return ContentKind.PDF
    if content_type.startswith("image/") or kind == "image":
        return ContentKind.IMAGE
    return ContentKind.UNSUPPORTED

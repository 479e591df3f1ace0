import re

from docextract.exceptions import ReferenceFormatError

_IMAGE_KEY_PATTERN = re.compile(r"/images/[^/]+/[^/]+$")


def resolve_storage_key(source_ref: str) -> str:
    """Map a CDN or bucket URL to its storage key: images/{owner}/{file}.

    Raises:
        ReferenceFormatError: if the reference does not end in /images/{owner}/{file}.
    """
    match = _IMAGE_KEY_PATTERN.search(source_ref or "")
    if match is None:
        raise ReferenceFormatError(f"Could not extract storage key from URL: {source_ref}")
    return match.group(0)[1:]

"""Multimodal text extraction and description of a single image."""

import re
from pathlib import Path

from docextract.inference.client_base import BaseInferenceClient, InlineMedia
from docextract.inference.prompt_loader import load_prompt_template
from docextract.logging.logger import Log
from docextract.pipeline.models import ImageAnalysis

_TEXT_SECTION = re.compile(r"## Extracted Text\s*(.*?)(?=## Description|$)", re.I | re.S)
_DESCRIPTION_SECTION = re.compile(r"## Description\s*(.*)$", re.I | re.S)


def parse_sections(response: str) -> ImageAnalysis:
    """Split a model response into its Extracted Text and Description sections.

    When neither marker is present the whole response is kept as text.
    """
    text_match = _TEXT_SECTION.search(response)
    description_match = _DESCRIPTION_SECTION.search(response)
    text = text_match.group(1).strip() if text_match else ""
    description = description_match.group(1).strip() if description_match else ""
    if not text and not description:
        text = response
    return ImageAnalysis(text=text, description=description)


class ImageAnalyzer:
    def __init__(
        self,
        *,
        client: BaseInferenceClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._prompt_template = load_prompt_template("image_prompt.txt", prompt_template_path)

    def analyze(self, image: bytes, media_type: str, document_name: str) -> ImageAnalysis:
        prompt = self._prompt_template.format(document_name=document_name)
        raw_response = self._client.generate(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            prompt=prompt,
            media=[InlineMedia(data=image, media_type=media_type)],
        )
        Log.debug(f"AI raw response:\n{raw_response}")
        return parse_sections(raw_response)

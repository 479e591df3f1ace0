from pathlib import Path

from docextract.inference.client_base import BaseInferenceClient
from docextract.inference.prompt_loader import load_prompt_template
from docextract.logging.logger import Log

TRUNCATION_MARKER = "\n\n[Content truncated due to length...]"


def truncate_for_prompt(raw_text: str, max_chars: int) -> str:
    if len(raw_text) <= max_chars:
        return raw_text
    return raw_text[:max_chars] + TRUNCATION_MARKER


class TextReconstructor:
    """Cleans raw OCR text into readable, sectioned content."""

    def __init__(
        self,
        *,
        client: BaseInferenceClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        max_input_chars: int = 100_000,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._max_input_chars = max_input_chars
        self._prompt_template = load_prompt_template(
            "reconstruction_prompt.txt", prompt_template_path
        )

    def reconstruct(self, raw_text: str, document_name: str) -> str:
        input_text = truncate_for_prompt(raw_text, self._max_input_chars)
        prompt = self._prompt_template.format(
            document_name=document_name,
            raw_text=input_text,
        )
        Log.debug(f"Reconstruction prompt:\n{prompt}")
        Log.info(
            f"Reconstructing OCR text for '{document_name}': "
            f"{len(raw_text)} chars in, {len(input_text)} sent"
        )
        result = self._client.generate(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            prompt=prompt,
        )
        Log.info(f"Reconstruction complete: {len(result)} chars out")
        return result

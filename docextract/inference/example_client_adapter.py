"""Example inference client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseInferenceClient and register the provider in InferenceFactory.
"""

from typing import ClassVar

from docextract.inference.client_base import BaseInferenceClient, InlineMedia


class ExampleClientAdapter(BaseInferenceClient):
    """Example adapter that returns fixed, well-formed responses.

    No network calls. Useful for local development and tests.
    """

    IMAGE_RESPONSE: ClassVar[str] = (
        "## Extracted Text\n\n## Description\nExample description of the image."
    )
    TEXT_RESPONSE: ClassVar[str] = "Example reconstructed content."

    def generate(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        media: list[InlineMedia] | None = None,
    ) -> str:
        _ = model, temperature, max_tokens, prompt
        return self.IMAGE_RESPONSE if media else self.TEXT_RESPONSE

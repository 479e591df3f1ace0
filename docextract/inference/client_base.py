from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class InlineMedia:
    """Binary content sent alongside a prompt, e.g. an image."""

    data: bytes
    media_type: str


class BaseInferenceClient(ABC):
    """Contract for provider-specific text generation clients."""

    @abstractmethod
    def generate(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        media: list[InlineMedia] | None = None,
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            InferenceError: if the provider returns no usable content.
            InferenceNetworkError: if the provider cannot be reached.
        """

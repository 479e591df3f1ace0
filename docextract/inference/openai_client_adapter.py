import base64

import httpx
import openai

from docextract.exceptions import InferenceError, InferenceNetworkError
from docextract.inference.client_base import BaseInferenceClient, InlineMedia


class OpenAIClientAdapter(BaseInferenceClient):
    """Inference client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def generate(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        media: list[InlineMedia] | None = None,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": self._build_content(prompt, media)}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise InferenceError("AI returned empty response")
        return content

    @staticmethod
    def _build_content(
        prompt: str,
        media: list[InlineMedia] | None,
    ) -> str | list[dict[str, object]]:
        if not media:
            return prompt
        parts: list[dict[str, object]] = [
            {
                "type": "image_url",
                "image_url": {
                    "url": (
                        f"data:{item.media_type};base64,"
                        f"{base64.b64encode(item.data).decode('ascii')}"
                    ),
                },
            }
            for item in media
        ]
        parts.append({"type": "text", "text": prompt})
        return parts

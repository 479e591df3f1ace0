from typing import ClassVar

from docextract.config.settings import Settings
from docextract.inference.client_base import BaseInferenceClient
from docextract.inference.example_client_adapter import ExampleClientAdapter
from docextract.inference.image_analyzer import ImageAnalyzer
from docextract.inference.openai_client_adapter import OpenAIClientAdapter
from docextract.inference.reconstructor import TextReconstructor


class InferenceFactory:
    """Creates the configured inference client and the components built on it."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create_client(cls, settings: Settings) -> BaseInferenceClient:
        provider = settings.inference_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def create(
        cls,
        settings: Settings,
        client: BaseInferenceClient | None = None,
    ) -> tuple[ImageAnalyzer, TextReconstructor]:
        """Build an ImageAnalyzer and a TextReconstructor sharing one client."""
        if client is None:
            client = cls.create_client(settings)
        model = cls._resolve_model_name(settings.inference_provider.lower(), settings)
        analyzer = ImageAnalyzer(
            client=client,
            model=model,
            temperature=settings.inference_temperature,
            max_tokens=settings.inference_max_tokens,
        )
        reconstructor = TextReconstructor(
            client=client,
            model=model,
            temperature=settings.inference_temperature,
            max_tokens=settings.inference_max_tokens,
            max_input_chars=settings.reconstruction_max_input_chars,
        )
        return analyzer, reconstructor

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.inference_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "inference_openai_compatible_base_url is required for "
                    "inference_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown inference provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.inference_openai_api_key,
            "openai_compatible": settings.inference_openai_compatible_api_key,
            "openrouter": settings.inference_openrouter_api_key,
            "ollama": settings.inference_ollama_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        if provider == "example":
            return "example"
        key_map = {
            "openai": settings.inference_openai_model_name,
            "openai_compatible": settings.inference_openai_compatible_model_name,
            "openrouter": settings.inference_openrouter_model_name,
            "ollama": settings.inference_ollama_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openai": settings.inference_openai_timeout_seconds,
            "openai_compatible": settings.inference_openai_compatible_timeout_seconds,
            "openrouter": settings.inference_openrouter_timeout_seconds,
            "ollama": settings.inference_ollama_timeout_seconds,
        }
        return key_map.get(provider, 60) or 60

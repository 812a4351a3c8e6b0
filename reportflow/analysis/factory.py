from typing import ClassVar

from reportflow.analysis.analyzer import ReportAnalyzer
from reportflow.analysis.example_client_adapter import ExampleClientAdapter
from reportflow.analysis.openai_client_adapter import OpenAIClientAdapter
from reportflow.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured report analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> ReportAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ReportAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                call_timeout_seconds=settings.analysis_call_timeout_seconds,
            )
        base_url = cls._resolve_base_url(provider, settings)
        client = OpenAIClientAdapter(
            api_key=cls._resolve("api_key", provider, settings),
            timeout_seconds=cls._resolve("timeout_seconds", provider, settings),
            base_url=base_url,
        )
        return ReportAnalyzer(
            client=client,
            model=cls._resolve("model_name", provider, settings),
            temperature=settings.analysis_temperature,
            call_timeout_seconds=settings.analysis_call_timeout_seconds,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.analysis_openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "analysis_openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
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
        raise ValueError(f"Unknown analysis provider '{provider}'. Choose from: {supported}")

    @staticmethod
    def _resolve(suffix: str, provider: str, settings: Settings):  # type: ignore[no-untyped-def]
        return getattr(settings, f"analysis_{provider}_{suffix}")

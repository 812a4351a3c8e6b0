from reportflow.config.settings import Settings
from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.example_adapter import ExampleOcrAdapter
from reportflow.ocr.google_vision_adapter import GoogleVisionAdapter
from reportflow.processor.file_loader import FileLoader


class OcrClientFactory:
    """Creates the configured OCR adapter."""

    PROVIDERS = ("google_vision", "example")

    @classmethod
    def create(cls, settings: Settings, file_loader: FileLoader | None = None) -> BaseOcrClient:
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return ExampleOcrAdapter()
        if provider == "google_vision":
            return GoogleVisionAdapter(
                api_key=settings.google_vision_api_key,
                base_url=settings.google_vision_base_url,
                language_hints=settings.ocr_language_hints,
                timeout_seconds=settings.ocr_timeout_seconds,
                file_loader=file_loader,
            )
        raise ValueError(f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}")

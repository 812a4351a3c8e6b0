from reportflow.config.settings import Settings
from reportflow.imaging.base import BaseImageClient
from reportflow.imaging.example_image_adapter import ExampleImageAdapter
from reportflow.imaging.generator import IllustrationGenerator
from reportflow.imaging.openai_image_adapter import OpenAIImageAdapter


class ImageGeneratorFactory:
    """Creates the configured illustration generator."""

    PROVIDERS = ("openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> IllustrationGenerator:
        return IllustrationGenerator(
            client=cls._create_client(settings),
            model=settings.image_model,
            size=settings.image_size,
            quality=settings.image_quality,
            style=settings.image_style,
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseImageClient:
        provider = settings.image_provider.lower()
        if provider == "example":
            return ExampleImageAdapter()
        if provider == "openai":
            return OpenAIImageAdapter(
                api_key=settings.image_openai_api_key,
                timeout_seconds=settings.image_timeout_seconds,
            )
        raise ValueError(
            f"Unknown image provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

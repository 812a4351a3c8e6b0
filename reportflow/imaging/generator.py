from datetime import datetime, timezone

from reportflow.imaging.base import BaseImageClient
from reportflow.imaging.exceptions import ImageGenError
from reportflow.imaging.models import GeneratedImage
from reportflow.logging.logger import Log


class IllustrationGenerator:
    """Generates patient-facing medical illustrations from a text prompt."""

    def __init__(
        self,
        *,
        client: BaseImageClient,
        model: str = "dall-e-3",
        size: str = "1024x1024",
        quality: str = "standard",
        style: str = "natural",
    ) -> None:
        self._client = client
        self._model = model
        self._size = size
        self._quality = quality
        self._style = style

    async def generate_medical_illustration(self, prompt: str) -> GeneratedImage:
        """Generate a single illustration.

        Raises:
            ImageGenError: if the prompt is empty or the provider fails.
        """
        if not prompt.strip():
            raise ImageGenError("Cannot generate an illustration from an empty prompt")
        try:
            url = await self._client.generate(
                prompt=prompt,
                model=self._model,
                size=self._size,
                quality=self._quality,
                style=self._style,
            )
        except Exception as exc:
            raise ImageGenError(f"Failed to generate medical illustration: {exc}") from exc
        Log.info(f"Generated illustration with {self._model}")
        return GeneratedImage(
            url=url,
            prompt=prompt,
            model=self._model,
            generated_at=datetime.now(timezone.utc),
        )

    async def generate_variations(self, prompt: str, count: int = 1) -> list[GeneratedImage]:
        """Generate up to ``count`` illustrations, skipping individual failures.

        An empty list means every attempt failed.
        """
        images: list[GeneratedImage] = []
        for index in range(count):
            try:
                images.append(await self.generate_medical_illustration(prompt))
            except Exception as exc:
                Log.warning(f"Error generating image {index + 1} of {count}: {exc}")
        if count > 0 and not images:
            Log.warning(f"All {count} illustration attempts failed")
        return images

"""Example image client: cycles through fixed placeholder URLs, no network."""

from typing import ClassVar

from reportflow.imaging.base import BaseImageClient


class ExampleImageAdapter(BaseImageClient):
    PLACEHOLDER_URLS: ClassVar[tuple[str, ...]] = (
        "https://images.pexels.com/photos/4386467/pexels-photo-4386467.jpeg",
        "https://images.pexels.com/photos/3825581/pexels-photo-3825581.jpeg",
        "https://images.pexels.com/photos/40568/medical-appointment-doctor-healthcare-40568.jpeg",
        "https://images.pexels.com/photos/5473298/pexels-photo-5473298.jpeg",
    )

    def __init__(self) -> None:
        self._calls = 0

    async def generate(
        self,
        *,
        prompt: str,
        model: str,
        size: str,
        quality: str,
        style: str,
    ) -> str:
        _ = prompt, model, size, quality, style
        url = self.PLACEHOLDER_URLS[self._calls % len(self.PLACEHOLDER_URLS)]
        self._calls += 1
        return url

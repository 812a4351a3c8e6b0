from abc import ABC, abstractmethod


class BaseImageClient(ABC):
    """Contract for provider-specific image generation clients."""

    @abstractmethod
    async def generate(
        self,
        *,
        prompt: str,
        model: str,
        size: str,
        quality: str,
        style: str,
    ) -> str:
        """Generate one image and return its URL.

        Raises:
            ImageGenError: on any provider or transport failure.
        """

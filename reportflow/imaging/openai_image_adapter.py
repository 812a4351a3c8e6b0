import httpx
import openai

from reportflow.imaging.base import BaseImageClient
from reportflow.imaging.exceptions import ImageGenError


class OpenAIImageAdapter(BaseImageClient):
    """Image client built on the OpenAI images API (DALL-E)."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)

    async def generate(
        self,
        *,
        prompt: str,
        model: str,
        size: str,
        quality: str,
        style: str,
    ) -> str:
        try:
            response = await self._client.images.generate(
                model=model,
                prompt=prompt,
                n=1,
                size=size,  # type: ignore[arg-type]
                quality=quality,  # type: ignore[arg-type]
                style=style,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ImageGenError(f"Image provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ImageGenError(f"Image provider API error: {exc}") from exc

        if not response.data or not response.data[0].url:
            raise ImageGenError("Image provider returned no image URL")
        return response.data[0].url

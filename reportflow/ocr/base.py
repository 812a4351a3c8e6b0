from abc import ABC, abstractmethod

from reportflow.ocr.models import OCRResult


class BaseOcrClient(ABC):
    """Contract for all image-to-text adapters."""

    @abstractmethod
    async def extract_text_from_image(self, image: bytes | str) -> OCRResult:
        """Run OCR on a single image.

        Args:
            image: Raw image bytes, or a path/URI the adapter can load.

        Returns:
            OCRResult with trimmed, non-empty text.

        Raises:
            OCRError: on any failure, including when no text is found.
        """

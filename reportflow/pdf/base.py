from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all embedded-text PDF extraction adapters."""

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Extract the text layer of every page, in page order.

        Pages without a text layer yield an empty string.

        Raises:
            PdfExtractionError: if the document cannot be parsed.
        """

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the whole text layer as one stripped string."""
        return "\n".join(self.extract_pages(pdf_bytes)).strip()

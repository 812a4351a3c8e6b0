from reportflow.config.settings import Settings
from reportflow.ocr.base import BaseOcrClient
from reportflow.pdf.base import BasePdfExtractor
from reportflow.pdf.extraction_service import PdfExtractionService
from reportflow.pdf.pdfplumber_adapter import PdfPlumberAdapter
from reportflow.pdf.pymupdf_adapter import PyMuPdfAdapter
from reportflow.pdf.renderer import PdfPageRenderer
from reportflow.processor.file_loader import FileLoader


class PdfExtractorFactory:
    """Builds the text-layer extractor and the direct/OCR extraction service."""

    ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        try:
            return cls.ENGINES[engine]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ENGINES)}"
            ) from None

    @classmethod
    def create_service(
        cls,
        settings: Settings,
        ocr_client: BaseOcrClient,
        file_loader: FileLoader | None = None,
    ) -> PdfExtractionService:
        """Service that reads the text layer and falls back to OCR of rendered pages."""
        return PdfExtractionService(
            extractor=cls.create(settings),
            renderer=PdfPageRenderer(zoom=settings.pdf_render_zoom),
            ocr_client=ocr_client,
            file_loader=file_loader,
            min_direct_chars=settings.pdf_min_direct_chars,
        )

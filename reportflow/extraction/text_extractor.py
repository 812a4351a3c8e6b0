from reportflow.extraction.exceptions import UnsupportedTypeError
from reportflow.extraction.models import (
    DocumentFormat,
    ExtractedText,
    ExtractionMetadata,
    ExtractionMethod,
)
from reportflow.extraction.quality import get_extraction_stats
from reportflow.logging.logger import Log
from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.medical_text import preprocess_medical_text, validate_medical_report
from reportflow.pdf.extraction_service import PdfExtractionService
from reportflow.pdf.models import PdfExtractionMethod
from reportflow.pdf.validator import validate_medical_pdf
from reportflow.processor.file_loader import FileLoader

PDF_MIME_TYPE = "application/pdf"


def is_supported_mime_type(mime_type: str) -> bool:
    normalized = mime_type.lower().strip()
    return normalized.startswith("image/") or normalized == PDF_MIME_TYPE


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class TextExtractor:
    """Routes a file to OCR or PDF extraction and returns unified ExtractedText."""

    def __init__(
        self,
        *,
        file_loader: FileLoader,
        ocr_client: BaseOcrClient,
        pdf_service: PdfExtractionService,
        language: str | None = "en",
    ) -> None:
        self._file_loader = file_loader
        self._ocr_client = ocr_client
        self._pdf_service = pdf_service
        self._language = language

    async def extract_text(self, file_uri: str, mime_type: str) -> ExtractedText:
        """Extract, clean and annotate the text of one report file.

        Raises:
            UnsupportedTypeError: before any I/O for unsupported MIME types.
            OCRError / PdfError / ProcessorError: from the selected path.
        """
        if not is_supported_mime_type(mime_type):
            raise UnsupportedTypeError(mime_type)

        content = await self._file_loader.load(file_uri)
        if mime_type.lower().strip() == PDF_MIME_TYPE:
            result = await self._from_pdf(content)
        else:
            result = await self._from_image(content)

        stats = get_extraction_stats(result)
        Log.info(
            f"Extracted {stats.character_count} chars / {stats.word_count} words "
            f"via {stats.extraction_method.value} (confidence {stats.confidence:.2f})"
        )
        return result

    async def _from_image(self, content: bytes) -> ExtractedText:
        ocr = await self._ocr_client.extract_text_from_image(content)
        text = preprocess_medical_text(ocr.text)
        validation = validate_medical_report(text)
        return ExtractedText(
            text=text,
            confidence=_clamp(ocr.confidence),
            extraction_method=ExtractionMethod.OCR,
            metadata=ExtractionMetadata(
                format=DocumentFormat.IMAGE,
                is_valid_medical=validation.is_valid,
                language=self._language,
                detected_type=validation.detected_type,
            ),
        )

    async def _from_pdf(self, content: bytes) -> ExtractedText:
        pdf = await self._pdf_service.extract_text_from_pdf(content)
        text = preprocess_medical_text(pdf.text)
        validation = validate_medical_pdf(text)
        method = (
            ExtractionMethod.PDF_DIRECT
            if pdf.extraction_method is PdfExtractionMethod.DIRECT
            else ExtractionMethod.PDF_OCR
        )
        return ExtractedText(
            text=text,
            confidence=_clamp(pdf.confidence),
            extraction_method=method,
            metadata=ExtractionMetadata(
                format=DocumentFormat.PDF,
                is_valid_medical=validation.is_valid,
                page_count=pdf.page_count,
                language=self._language,
                detected_sections=tuple(validation.detected_sections),
            ),
        )

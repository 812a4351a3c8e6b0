"""Two-attempt PDF text extraction: embedded text layer first, OCR second."""

import asyncio

from reportflow.logging.logger import Log
from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.exceptions import OCRError, OCRErrorReason
from reportflow.pdf.base import BasePdfExtractor
from reportflow.pdf.exceptions import PdfError, PdfExtractionError, PdfRenderError
from reportflow.pdf.models import PDFExtractionResult, PdfExtractionMethod, PdfPage
from reportflow.pdf.renderer import PdfPageRenderer
from reportflow.processor.file_loader import FileLoader

DIRECT_CONFIDENCE = 0.95
MIN_DIRECT_CHARS = 100
PAGE_SEPARATOR = "\n\n"


class PdfExtractionService:
    """Turns a PDF into text, falling back to OCR of rendered pages.

    The direct attempt is accepted when it yields at least ``min_direct_chars``
    characters. Otherwise every page is rendered and OCR'd in order. The call
    only fails when the text layer could not be read at all and OCR failed too.
    """

    def __init__(
        self,
        *,
        extractor: BasePdfExtractor,
        renderer: PdfPageRenderer,
        ocr_client: BaseOcrClient,
        file_loader: FileLoader | None = None,
        min_direct_chars: int = MIN_DIRECT_CHARS,
    ) -> None:
        self._extractor = extractor
        self._renderer = renderer
        self._ocr_client = ocr_client
        self._file_loader = file_loader if file_loader is not None else FileLoader()
        self._min_direct_chars = min_direct_chars

    async def extract_text_from_pdf(self, pdf: bytes | str) -> PDFExtractionResult:
        pdf_bytes = await self._load(pdf)

        direct_pages: list[str] | None = None
        try:
            direct_pages = await asyncio.to_thread(self._extractor.extract_pages, pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning(f"Direct PDF text extraction failed, trying OCR: {exc}")

        if direct_pages is not None:
            direct_text = "\n".join(direct_pages).strip()
            if len(direct_text) >= self._min_direct_chars:
                Log.info(
                    f"Direct PDF extraction: {len(direct_text)} chars "
                    f"from {len(direct_pages)} pages"
                )
                return self._direct_result(direct_text, direct_pages, DIRECT_CONFIDENCE)
            Log.info(
                f"Direct PDF text too short ({len(direct_text)} chars), falling back to OCR"
            )

        try:
            return await self._extract_with_ocr(pdf_bytes)
        except (OCRError, PdfRenderError) as exc:
            if direct_pages is None:
                raise PdfError(f"PDF extraction failed: {exc}") from exc
            Log.warning(f"PDF OCR fallback failed, keeping short direct text: {exc}")
            text = "\n".join(direct_pages).strip()
            confidence = DIRECT_CONFIDENCE * min(1.0, len(text) / self._min_direct_chars)
            return self._direct_result(text, direct_pages, confidence)

    async def _load(self, pdf: bytes | str) -> bytes:
        if isinstance(pdf, bytes):
            return pdf
        try:
            return await self._file_loader.load(pdf)
        except Exception as exc:
            raise PdfError(f"PDF extraction failed: could not read file: {exc}") from exc

    async def _extract_with_ocr(self, pdf_bytes: bytes) -> PDFExtractionResult:
        images = await asyncio.to_thread(self._renderer.render_pages, pdf_bytes)
        pages: list[PdfPage] = []
        for number, image in enumerate(images, start=1):
            try:
                ocr = await self._ocr_client.extract_text_from_image(image)
                pages.append(PdfPage(page_number=number, text=ocr.text, confidence=ocr.confidence))
            except OCRError as exc:
                if exc.reason is not OCRErrorReason.NO_TEXT:
                    raise
                Log.debug(f"No text found on rendered page {number}")
                pages.append(PdfPage(page_number=number, text="", confidence=0.0))

        text = PAGE_SEPARATOR.join(page.text for page in pages if page.text)
        confidence = (
            sum(page.confidence or 0.0 for page in pages) / len(pages) if pages else 0.0
        )
        Log.info(f"PDF OCR extraction: {len(text)} chars from {len(pages)} pages")
        return PDFExtractionResult(
            text=text,
            page_count=len(pages),
            extraction_method=PdfExtractionMethod.OCR,
            confidence=confidence,
            pages=pages,
        )

    @staticmethod
    def _direct_result(
        text: str, page_texts: list[str], confidence: float
    ) -> PDFExtractionResult:
        return PDFExtractionResult(
            text=text,
            page_count=len(page_texts),
            extraction_method=PdfExtractionMethod.DIRECT,
            confidence=confidence,
            pages=[
                PdfPage(page_number=i, text=page, confidence=confidence)
                for i, page in enumerate(page_texts, start=1)
            ],
        )

from unittest.mock import AsyncMock, MagicMock

import pytest

from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.exceptions import OCRError, OCRErrorReason
from reportflow.ocr.models import OCRResult
from reportflow.pdf.base import BasePdfExtractor
from reportflow.pdf.exceptions import PdfError, PdfExtractionError, PdfRenderError
from reportflow.pdf.extraction_service import PdfExtractionService
from reportflow.pdf.models import PdfExtractionMethod
from reportflow.pdf.pdfplumber_adapter import PdfPlumberAdapter
from reportflow.pdf.renderer import PdfPageRenderer
from reportflow.processor.file_loader import FileLoader

LONG_PAGE = "Findings: mild disc bulge at L4-L5 without stenosis. " * 3


def _make_service(
    pages: list[str] | Exception,
    rendered: list[bytes] | Exception | None = None,
    ocr: list[OCRResult | Exception] | None = None,
) -> tuple[PdfExtractionService, MagicMock, MagicMock, MagicMock]:
    extractor = MagicMock(spec=BasePdfExtractor)
    if isinstance(pages, Exception):
        extractor.extract_pages.side_effect = pages
    else:
        extractor.extract_pages.return_value = pages

    renderer = MagicMock(spec=PdfPageRenderer)
    if isinstance(rendered, Exception):
        renderer.render_pages.side_effect = rendered
    else:
        renderer.render_pages.return_value = rendered or []

    ocr_client = MagicMock(spec=BaseOcrClient)
    ocr_client.extract_text_from_image = AsyncMock(side_effect=ocr or [])

    service = PdfExtractionService(
        extractor=extractor,
        renderer=renderer,
        ocr_client=ocr_client,
        file_loader=MagicMock(spec=FileLoader),
    )
    return service, extractor, renderer, ocr_client


class TestDirectExtraction:
    async def test_long_text_layer_is_used_directly(self) -> None:
        service, _, renderer, ocr_client = _make_service([LONG_PAGE, "Impression: mild."])

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.extraction_method is PdfExtractionMethod.DIRECT
        assert result.confidence == 0.95
        assert result.page_count == 2
        assert "Impression: mild." in result.text
        renderer.render_pages.assert_not_called()
        ocr_client.extract_text_from_image.assert_not_called()

    async def test_real_pdf_with_text_layer(self, report_pdf_bytes: bytes) -> None:
        ocr_client = MagicMock(spec=BaseOcrClient)
        ocr_client.extract_text_from_image = AsyncMock()
        service = PdfExtractionService(
            extractor=PdfPlumberAdapter(),
            renderer=PdfPageRenderer(),
            ocr_client=ocr_client,
        )

        result = await service.extract_text_from_pdf(report_pdf_bytes)

        assert result.extraction_method is PdfExtractionMethod.DIRECT
        assert "Impression" in result.text
        ocr_client.extract_text_from_image.assert_not_called()

    async def test_loads_pdf_from_uri(self) -> None:
        service, extractor, _, _ = _make_service([LONG_PAGE])
        service._file_loader.load = AsyncMock(return_value=b"%PDF-from-disk")  # type: ignore[method-assign]

        await service.extract_text_from_pdf("/tmp/report.pdf")

        extractor.extract_pages.assert_called_once_with(b"%PDF-from-disk")

    async def test_unreadable_uri_raises_pdf_error(self) -> None:
        service, _, _, _ = _make_service([LONG_PAGE])
        service._file_loader.load = AsyncMock(side_effect=OSError("gone"))  # type: ignore[method-assign]

        with pytest.raises(PdfError, match="could not read file"):
            await service.extract_text_from_pdf("/tmp/missing.pdf")


class TestOcrFallback:
    async def test_short_text_layer_falls_back_to_ocr(self) -> None:
        service, _, renderer, ocr_client = _make_service(
            ["scan"],
            rendered=[b"png-1", b"png-2"],
            ocr=[
                OCRResult(text="Findings: normal", confidence=0.9),
                OCRResult(text="Impression: normal", confidence=0.7),
            ],
        )

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.extraction_method is PdfExtractionMethod.OCR
        assert result.text == "Findings: normal\n\nImpression: normal"
        assert result.page_count == 2
        assert result.confidence == pytest.approx(0.8)
        assert [p.page_number for p in result.pages] == [1, 2]
        assert ocr_client.extract_text_from_image.await_count == 2

    async def test_page_without_text_is_kept_with_zero_confidence(self) -> None:
        service, _, _, _ = _make_service(
            [""],
            rendered=[b"png-1", b"png-2"],
            ocr=[
                OCRError("No text", OCRErrorReason.NO_TEXT),
                OCRResult(text="Impression: normal", confidence=0.8),
            ],
        )

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.text == "Impression: normal"
        assert result.pages[0].text == ""
        assert result.pages[0].confidence == 0.0
        assert result.confidence == pytest.approx(0.4)

    async def test_broken_text_layer_uses_ocr(self) -> None:
        service, _, _, _ = _make_service(
            PdfExtractionError("bad xref"),
            rendered=[b"png-1"],
            ocr=[OCRResult(text="Findings: normal", confidence=0.9)],
        )

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.extraction_method is PdfExtractionMethod.OCR
        assert result.text == "Findings: normal"

    async def test_ocr_failure_keeps_short_direct_text(self) -> None:
        service, _, _, _ = _make_service(
            ["Findings: normal" + " " * 4 + "x" * 34],
            rendered=[b"png-1"],
            ocr=[OCRError("quota exceeded", OCRErrorReason.QUOTA)],
        )

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.extraction_method is PdfExtractionMethod.DIRECT
        assert len(result.text) == 54
        assert result.confidence == pytest.approx(0.95 * 0.54)

    async def test_empty_direct_text_and_failed_ocr_returns_empty_result(self) -> None:
        service, _, _, _ = _make_service([""], rendered=PdfRenderError("render failed"))

        result = await service.extract_text_from_pdf(b"%PDF")

        assert result.text == ""
        assert result.confidence == 0.0

    async def test_both_attempts_failing_raises(self) -> None:
        service, _, _, _ = _make_service(
            PdfExtractionError("bad xref"),
            rendered=[b"png-1"],
            ocr=[OCRError("invalid api key", OCRErrorReason.AUTH)],
        )

        with pytest.raises(PdfError, match="PDF extraction failed"):
            await service.extract_text_from_pdf(b"%PDF")

    async def test_render_failure_after_broken_text_layer_raises(self) -> None:
        service, _, _, _ = _make_service(
            PdfExtractionError("bad xref"), rendered=PdfRenderError("render failed")
        )

        with pytest.raises(PdfError, match="render failed"):
            await service.extract_text_from_pdf(b"%PDF")

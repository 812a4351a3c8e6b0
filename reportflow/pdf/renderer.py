import pymupdf

from reportflow.pdf.exceptions import PdfRenderError


class PdfPageRenderer:
    """Renders each PDF page to a PNG so it can be sent through OCR."""

    def __init__(self, zoom: float = 2.0) -> None:
        self._zoom = zoom

    def render_pages(self, pdf_bytes: bytes) -> list[bytes]:
        """Return one PNG image per page, in page order.

        Raises:
            PdfRenderError: if the document cannot be opened or rendered.
        """
        try:
            matrix = pymupdf.Matrix(self._zoom, self._zoom)
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_pixmap(matrix=matrix).tobytes("png") for page in doc]
        except Exception as exc:
            raise PdfRenderError(f"page rendering failed: {exc}") from exc

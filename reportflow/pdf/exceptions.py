class PdfError(Exception):
    """Raised when no strategy could turn a PDF into text."""


class PdfExtractionError(PdfError):
    """Raised when the embedded text layer cannot be read."""


class PdfRenderError(PdfError):
    """Raised when PDF pages cannot be rendered to images."""

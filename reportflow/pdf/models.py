from dataclasses import dataclass, field
from enum import Enum


class PdfExtractionMethod(str, Enum):
    DIRECT = "direct"
    OCR = "ocr"


@dataclass(frozen=True)
class PdfPage:
    page_number: int
    text: str
    confidence: float | None = None


@dataclass(frozen=True)
class PDFExtractionResult:
    """Text pulled out of one PDF, either from its text layer or via OCR."""

    text: str
    page_count: int
    extraction_method: PdfExtractionMethod
    confidence: float
    pages: list[PdfPage] = field(default_factory=list)


@dataclass(frozen=True)
class MedicalPdfValidation:
    is_valid: bool
    confidence: float
    detected_sections: list[str] = field(default_factory=list)

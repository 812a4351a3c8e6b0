from dataclasses import dataclass, field
from enum import Enum


class ExtractionMethod(str, Enum):
    OCR = "ocr"
    PDF_DIRECT = "pdf-direct"
    PDF_OCR = "pdf-ocr"


class DocumentFormat(str, Enum):
    IMAGE = "image"
    PDF = "pdf"


@dataclass(frozen=True)
class ExtractionMetadata:
    format: DocumentFormat
    is_valid_medical: bool
    page_count: int | None = None
    language: str | None = None
    detected_type: str | None = None
    detected_sections: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractedText:
    """Cleaned report text plus how it was obtained."""

    text: str
    confidence: float
    extraction_method: ExtractionMethod
    metadata: ExtractionMetadata


@dataclass(frozen=True)
class TextQualityReport:
    is_valid: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionStats:
    character_count: int
    word_count: int
    line_count: int
    confidence: float
    extraction_method: ExtractionMethod

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vertex:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class BoundingBox:
    """A single detected word or phrase with its polygon."""

    text: str
    vertices: list[Vertex] = field(default_factory=list)


@dataclass(frozen=True)
class OCRResult:
    """Normalized output of one OCR call on one image."""

    text: str
    confidence: float
    bounding_boxes: list[BoundingBox] | None = None


@dataclass(frozen=True)
class MedicalReportValidation:
    is_valid: bool
    confidence: float
    detected_type: str | None = None

"""Keyword heuristics and cleanup for OCR'd medical report text."""

import re

from reportflow.ocr.models import MedicalReportValidation

MEDICAL_KEYWORDS: tuple[str, ...] = (
    "patient", "diagnosis", "findings", "impression", "recommendation",
    "clinical", "medical", "report", "examination", "study", "scan",
    "mri", "ct", "x-ray", "ultrasound", "blood", "test", "result",
    "normal", "abnormal", "within limits", "doctor", "physician",
    "hospital", "clinic", "radiology", "pathology", "laboratory",
)

# Checked in order; the first type with any matching keyword wins.
REPORT_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("mri", "magnetic resonance"), "MRI"),
    (("ct", "computed tomography", "cat scan"), "CT Scan"),
    (("x-ray", "radiograph", "chest film"), "X-Ray"),
    (("ultrasound", "sonogram", "echo"), "Ultrasound"),
    (("blood", "lab", "laboratory", "cbc", "chemistry"), "Blood Test"),
    (("pathology", "biopsy", "tissue"), "Pathology"),
)

STRUCTURE_MARKERS: tuple[str, ...] = ("findings", "impression")
PATIENT_MARKERS: tuple[str, ...] = ("patient", "name")

VALIDITY_THRESHOLD = 0.3

UNIT_CORRECTIONS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\b{word}\b", re.IGNORECASE), word)
    for word in ("patient", "findings", "impression", "normal", "abnormal", "mm", "cm", "ml", "mg")
)

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"\. ([A-Z])")


def detect_report_type(lower_text: str) -> str | None:
    for keywords, report_type in REPORT_TYPES:
        if any(keyword in lower_text for keyword in keywords):
            return report_type
    return None


def validate_medical_report(text: str) -> MedicalReportValidation:
    """Score how much ``text`` looks like a medical report.

    Keywords match as substrings, so "ct" also hits inside longer words.
    """
    lower_text = text.lower()
    found = [keyword for keyword in MEDICAL_KEYWORDS if keyword in lower_text]
    detected_type = detect_report_type(lower_text)

    confidence = len(found) / len(MEDICAL_KEYWORDS) * 0.6
    if any(marker in lower_text for marker in STRUCTURE_MARKERS):
        confidence += 0.2
    if any(marker in lower_text for marker in PATIENT_MARKERS):
        confidence += 0.1
    if detected_type is not None:
        confidence += 0.1

    return MedicalReportValidation(
        is_valid=confidence > VALIDITY_THRESHOLD,
        confidence=min(confidence, 1.0),
        detected_type=detected_type,
    )


def preprocess_medical_text(text: str) -> str:
    """Collapse whitespace, lowercase common terms/units, restore paragraphs."""
    cleaned = _WHITESPACE.sub(" ", text).strip()
    for pattern, replacement in UNIT_CORRECTIONS:
        cleaned = pattern.sub(replacement, cleaned)
    return _SENTENCE_BREAK.sub(r".\n\n\1", cleaned)

from reportflow.pdf.models import MedicalPdfValidation

MEDICAL_SECTIONS: tuple[str, ...] = (
    "clinical history",
    "technique",
    "findings",
    "impression",
    "recommendation",
    "patient",
    "study date",
    "radiologist",
    "physician",
)

VALIDITY_THRESHOLD = 0.3


def validate_medical_pdf(text: str) -> MedicalPdfValidation:
    """Score PDF text by the share of typical report sections it mentions."""
    lower_text = text.lower()
    found = [section for section in MEDICAL_SECTIONS if section in lower_text]
    confidence = len(found) / len(MEDICAL_SECTIONS)
    return MedicalPdfValidation(
        is_valid=confidence > VALIDITY_THRESHOLD,
        confidence=confidence,
        detected_sections=found,
    )

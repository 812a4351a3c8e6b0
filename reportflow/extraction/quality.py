"""Signal-quality checks on extracted text, independent of medical content."""

from reportflow.extraction.models import ExtractedText, ExtractionStats, TextQualityReport

MIN_TEXT_LENGTH = 50
MIN_CONFIDENCE = 0.7
MAX_DIGIT_DENSITY = 0.3
NUMERIC_CONFIDENCE_FLOOR = 0.8


def validate_extracted_text(result: ExtractedText) -> TextQualityReport:
    """Flag extraction results a user should probably re-capture.

    Every issue comes with a suggestion at the same index.
    """
    issues: list[str] = []
    suggestions: list[str] = []
    text = result.text

    if len(text) < MIN_TEXT_LENGTH:
        issues.append("Extracted text is very short")
        suggestions.append("Ensure the entire document is visible and in focus")

    if result.confidence < MIN_CONFIDENCE:
        issues.append(f"Low extraction confidence ({result.confidence:.0%})")
        suggestions.append("Retake the photo with better lighting and less glare")

    if result.metadata.is_valid_medical is False:
        issues.append("Document does not appear to be a medical report")
        suggestions.append("Check that the correct file was selected")

    digits = sum(ch.isdigit() for ch in text)
    density = digits / len(text) if text else 0.0
    if density > MAX_DIGIT_DENSITY and result.confidence < NUMERIC_CONFIDENCE_FLOOR:
        issues.append("Mostly numeric content extracted with uncertain accuracy")
        suggestions.append("Verify lab values against the original document")

    return TextQualityReport(is_valid=not issues, issues=issues, suggestions=suggestions)


def get_extraction_stats(result: ExtractedText) -> ExtractionStats:
    text = result.text
    return ExtractionStats(
        character_count=len(text),
        word_count=len(text.split()),
        line_count=len(text.splitlines()) if text else 0,
        confidence=result.confidence,
        extraction_method=result.extraction_method,
    )

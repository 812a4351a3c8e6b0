"""Validates the parsed model response and builds an AnalysisResult."""

from typing import Any

from reportflow.analysis.exceptions import AnalysisValidationError
from reportflow.analysis.models import AnalysisResult, VisualizationData

REQUIRED_FIELDS = ("detailedAnalysis", "visualizationData", "doctorScript")


def validate_and_build(data: dict[str, Any]) -> AnalysisResult:
    """Build an AnalysisResult from the raw JSON object.

    Raises:
        AnalysisValidationError: if a required field is missing, empty or mistyped.
    """
    for name in REQUIRED_FIELDS:
        if name not in data:
            raise AnalysisValidationError(f"Missing required field: {name}")

    detailed_analysis = _require_text(data["detailedAnalysis"], "detailedAnalysis")
    doctor_script = _require_text(data["doctorScript"], "doctorScript")
    visualization = _build_visualization(data["visualizationData"])
    return AnalysisResult(
        detailed_analysis=detailed_analysis,
        visualization_data=visualization,
        doctor_script=doctor_script,
    )


def _require_text(raw: Any, name: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise AnalysisValidationError(f"'{name}' must be a non-empty string")
    return raw.strip()


def _build_visualization(raw: Any) -> VisualizationData:
    if not isinstance(raw, dict) or not raw:
        raise AnalysisValidationError("'visualizationData' must be a non-empty object")
    metrics = raw.get("metrics")
    if metrics is None:
        metrics = {}
    if not isinstance(metrics, dict):
        raise AnalysisValidationError("'visualizationData.metrics' must be an object")
    notes = raw.get("visualNotes")
    if notes is None:
        notes = ""
    if not isinstance(notes, str):
        raise AnalysisValidationError("'visualizationData.visualNotes' must be a string")
    chart_data = raw.get("chartData")
    return VisualizationData(
        chart_data=chart_data if chart_data is not None else [],
        metrics=metrics,
        visual_notes=notes,
    )

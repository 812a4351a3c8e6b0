from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VisualizationData:
    """Chart-ready payload rendered next to the narrative analysis."""

    chart_data: Any = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)
    visual_notes: str = ""


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output of the analysis model.

    All three top-level fields are always non-empty; the analyzer substitutes
    a fallback payload rather than return anything partial.
    """

    detailed_analysis: str
    visualization_data: VisualizationData
    doctor_script: str
    is_fallback: bool = False

from dataclasses import dataclass, field

from reportflow.storage.models import (
    AnalysisRecord,
    ImageRecord,
    ReportRecord,
    VisualizationRecord,
)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one pipeline run. Returned to the caller, never persisted."""

    report_id: str
    analysis_id: str = ""
    visualization_id: str = ""
    image_ids: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ProcessedReport:
    """A report joined with everything the pipeline produced for it."""

    report: ReportRecord
    analysis: AnalysisRecord | None = None
    visualization: VisualizationRecord | None = None
    images: list[ImageRecord] = field(default_factory=list)

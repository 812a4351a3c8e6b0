from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ReportRecord:
    """Represents a row from the reports table."""

    id: str
    file_url: str
    report_type: str
    user_id: str | None = None
    original_filename: str | None = None
    uploaded_at: datetime | None = None


@dataclass
class AnalysisRecord:
    """Represents a row from the report_analysis table (one per report)."""

    id: str
    report_id: str
    ai_summary: str
    ai_doctor_explanation: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class VisualizationRecord:
    """Represents a row from the visualization_data table (one per report)."""

    id: str
    report_id: str
    chart_data: Any = None
    metrics: dict[str, Any] = field(default_factory=dict)
    visual_notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ImageRecord:
    """Represents a row from the ai_images table (many per report)."""

    id: str
    report_id: str
    image_url: str
    model_used: str
    prompt: str | None = None
    created_at: datetime | None = None

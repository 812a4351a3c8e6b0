"""In-process record store with the same upsert semantics as PostgreSQL.

Used for local development (``RECORD_STORE=memory``) and tests. Values are
deep-copied on the way in and out, the way a round trip through JSONB would.
Writes for an unknown report fail like the foreign keys in schema.sql.
"""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any

from reportflow.storage.base import BaseRecordStore
from reportflow.storage.exceptions import RecordStoreError
from reportflow.storage.models import (
    AnalysisRecord,
    ImageRecord,
    ReportRecord,
    VisualizationRecord,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryRecordStore(BaseRecordStore):
    def __init__(self) -> None:
        self.reports: dict[str, ReportRecord] = {}
        self.analyses: dict[str, AnalysisRecord] = {}
        self.visualizations: dict[str, VisualizationRecord] = {}
        self.images: list[ImageRecord] = []

    async def insert_report(
        self,
        *,
        file_url: str,
        report_type: str,
        user_id: str | None = None,
        original_filename: str | None = None,
    ) -> ReportRecord:
        record = ReportRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            file_url=file_url,
            report_type=report_type,
            original_filename=original_filename,
            uploaded_at=_now(),
        )
        self.reports[record.id] = record
        return copy.deepcopy(record)

    async def get_report(self, report_id: str) -> ReportRecord | None:
        return copy.deepcopy(self.reports.get(report_id))

    def _require_report(self, report_id: str, failure: str) -> None:
        if report_id not in self.reports:
            raise RecordStoreError(f"{failure}: report {report_id} does not exist")

    async def upsert_analysis(
        self,
        report_id: str,
        *,
        ai_summary: str,
        ai_doctor_explanation: str,
    ) -> AnalysisRecord:
        self._require_report(report_id, "Failed to save analysis")
        now = _now()
        existing = self.analyses.get(report_id)
        record = AnalysisRecord(
            id=existing.id if existing else str(uuid.uuid4()),
            report_id=report_id,
            ai_summary=ai_summary,
            ai_doctor_explanation=ai_doctor_explanation,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self.analyses[report_id] = record
        return copy.deepcopy(record)

    async def get_analysis(self, report_id: str) -> AnalysisRecord | None:
        return copy.deepcopy(self.analyses.get(report_id))

    async def upsert_visualization(
        self,
        report_id: str,
        *,
        chart_data: Any,
        metrics: dict[str, Any],
        visual_notes: str,
    ) -> VisualizationRecord:
        self._require_report(report_id, "Failed to save visualization data")
        now = _now()
        existing = self.visualizations.get(report_id)
        record = VisualizationRecord(
            id=existing.id if existing else str(uuid.uuid4()),
            report_id=report_id,
            chart_data=copy.deepcopy(chart_data),
            metrics=copy.deepcopy(metrics),
            visual_notes=visual_notes,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self.visualizations[report_id] = record
        return copy.deepcopy(record)

    async def get_visualization(self, report_id: str) -> VisualizationRecord | None:
        return copy.deepcopy(self.visualizations.get(report_id))

    async def insert_image(
        self,
        report_id: str,
        *,
        image_url: str,
        model_used: str,
        prompt: str | None = None,
    ) -> ImageRecord:
        self._require_report(report_id, "Failed to save generated image")
        record = ImageRecord(
            id=str(uuid.uuid4()),
            report_id=report_id,
            image_url=image_url,
            model_used=model_used,
            prompt=prompt,
            created_at=_now(),
        )
        self.images.append(record)
        return copy.deepcopy(record)

    async def list_images(self, report_id: str) -> list[ImageRecord]:
        return [copy.deepcopy(image) for image in self.images if image.report_id == report_id]

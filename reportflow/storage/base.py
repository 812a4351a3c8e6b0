from abc import ABC, abstractmethod
from typing import Any

from reportflow.storage.models import (
    AnalysisRecord,
    ImageRecord,
    ReportRecord,
    VisualizationRecord,
)


class BaseRecordStore(ABC):
    """Contract for the report record store.

    Analysis and visualization writes are upserts keyed by ``report_id``;
    image writes always insert a new row. Every failure is raised as
    RecordStoreError.
    """

    async def open(self) -> None:
        """Acquire resources. No-op by default."""

    async def close(self) -> None:
        """Release resources. No-op by default."""

    @abstractmethod
    async def insert_report(
        self,
        *,
        file_url: str,
        report_type: str,
        user_id: str | None = None,
        original_filename: str | None = None,
    ) -> ReportRecord: ...

    @abstractmethod
    async def get_report(self, report_id: str) -> ReportRecord | None: ...

    @abstractmethod
    async def upsert_analysis(
        self,
        report_id: str,
        *,
        ai_summary: str,
        ai_doctor_explanation: str,
    ) -> AnalysisRecord: ...

    @abstractmethod
    async def get_analysis(self, report_id: str) -> AnalysisRecord | None: ...

    @abstractmethod
    async def upsert_visualization(
        self,
        report_id: str,
        *,
        chart_data: Any,
        metrics: dict[str, Any],
        visual_notes: str,
    ) -> VisualizationRecord: ...

    @abstractmethod
    async def get_visualization(self, report_id: str) -> VisualizationRecord | None: ...

    @abstractmethod
    async def insert_image(
        self,
        report_id: str,
        *,
        image_url: str,
        model_used: str,
        prompt: str | None = None,
    ) -> ImageRecord: ...

    @abstractmethod
    async def list_images(self, report_id: str) -> list[ImageRecord]: ...

from pathlib import Path
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from reportflow.storage.base import BaseRecordStore
from reportflow.storage.exceptions import RecordStoreError
from reportflow.storage.models import (
    AnalysisRecord,
    ImageRecord,
    ReportRecord,
    VisualizationRecord,
)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class PostgresRecordStore(BaseRecordStore):
    """Record store backed by PostgreSQL through an async psycopg pool."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()

    async def ensure_schema(self) -> None:
        """Create the four tables if they do not exist yet."""
        sql = SCHEMA_PATH.read_text(encoding="utf-8")
        try:
            async with self._pool.connection() as conn:
                await conn.execute(sql)
                await conn.commit()
        except psycopg.Error as exc:
            raise RecordStoreError(f"Failed to apply schema: {exc}") from exc

    async def insert_report(
        self,
        *,
        file_url: str,
        report_type: str,
        user_id: str | None = None,
        original_filename: str | None = None,
    ) -> ReportRecord:
        row = await self._write_one(
            """
            INSERT INTO reports (user_id, file_url, report_type, original_filename)
            VALUES (%s, %s, %s, %s)
            RETURNING id, user_id, file_url, report_type, original_filename, uploaded_at
            """,
            (user_id, file_url, report_type, original_filename),
            "Failed to save report",
        )
        return _report_from_row(row)

    async def get_report(self, report_id: str) -> ReportRecord | None:
        row = await self._fetch_one(
            """
            SELECT id, user_id, file_url, report_type, original_filename, uploaded_at
            FROM reports
            WHERE id = %s
            """,
            (report_id,),
            "Failed to load report",
        )
        return _report_from_row(row) if row is not None else None

    async def upsert_analysis(
        self,
        report_id: str,
        *,
        ai_summary: str,
        ai_doctor_explanation: str,
    ) -> AnalysisRecord:
        row = await self._write_one(
            """
            INSERT INTO report_analysis (report_id, ai_summary, ai_doctor_explanation)
            VALUES (%s, %s, %s)
            ON CONFLICT (report_id) DO UPDATE
            SET ai_summary = EXCLUDED.ai_summary,
                ai_doctor_explanation = EXCLUDED.ai_doctor_explanation,
                updated_at = NOW()
            RETURNING id, report_id, ai_summary, ai_doctor_explanation, created_at, updated_at
            """,
            (report_id, ai_summary, ai_doctor_explanation),
            "Failed to save analysis",
        )
        return _analysis_from_row(row)

    async def get_analysis(self, report_id: str) -> AnalysisRecord | None:
        row = await self._fetch_one(
            """
            SELECT id, report_id, ai_summary, ai_doctor_explanation, created_at, updated_at
            FROM report_analysis
            WHERE report_id = %s
            """,
            (report_id,),
            "Failed to load analysis",
        )
        return _analysis_from_row(row) if row is not None else None

    async def upsert_visualization(
        self,
        report_id: str,
        *,
        chart_data: Any,
        metrics: dict[str, Any],
        visual_notes: str,
    ) -> VisualizationRecord:
        row = await self._write_one(
            """
            INSERT INTO visualization_data (report_id, chart_data, metrics, visual_notes)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (report_id) DO UPDATE
            SET chart_data = EXCLUDED.chart_data,
                metrics = EXCLUDED.metrics,
                visual_notes = EXCLUDED.visual_notes,
                updated_at = NOW()
            RETURNING id, report_id, chart_data, metrics, visual_notes, created_at, updated_at
            """,
            (report_id, Jsonb(chart_data), Jsonb(metrics), visual_notes),
            "Failed to save visualization data",
        )
        return _visualization_from_row(row)

    async def get_visualization(self, report_id: str) -> VisualizationRecord | None:
        row = await self._fetch_one(
            """
            SELECT id, report_id, chart_data, metrics, visual_notes, created_at, updated_at
            FROM visualization_data
            WHERE report_id = %s
            """,
            (report_id,),
            "Failed to load visualization data",
        )
        return _visualization_from_row(row) if row is not None else None

    async def insert_image(
        self,
        report_id: str,
        *,
        image_url: str,
        model_used: str,
        prompt: str | None = None,
    ) -> ImageRecord:
        row = await self._write_one(
            """
            INSERT INTO ai_images (report_id, image_url, model_used, prompt)
            VALUES (%s, %s, %s, %s)
            RETURNING id, report_id, image_url, model_used, prompt, created_at
            """,
            (report_id, image_url, model_used, prompt),
            "Failed to save generated image",
        )
        return _image_from_row(row)

    async def list_images(self, report_id: str) -> list[ImageRecord]:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        """
                        SELECT id, report_id, image_url, model_used, prompt, created_at
                        FROM ai_images
                        WHERE report_id = %s
                        ORDER BY created_at
                        """,
                        (report_id,),
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise RecordStoreError(f"Failed to load images: {exc}") from exc
        return [_image_from_row(row) for row in rows]

    async def _fetch_one(
        self, query: str, params: tuple[Any, ...], failure: str
    ) -> dict[str, Any] | None:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    return await cur.fetchone()
        except psycopg.errors.InvalidTextRepresentation:
            # Ids that are not UUIDs cannot match any row.
            return None
        except psycopg.Error as exc:
            raise RecordStoreError(f"{failure}: {exc}") from exc

    async def _write_one(
        self, query: str, params: tuple[Any, ...], failure: str
    ) -> dict[str, Any]:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as exc:
            raise RecordStoreError(f"{failure}: {exc}") from exc
        if row is None:
            raise RecordStoreError(f"{failure}: no row returned")
        return row


def _report_from_row(row: dict[str, Any]) -> ReportRecord:
    return ReportRecord(
        id=str(row["id"]),
        user_id=row["user_id"],
        file_url=row["file_url"],
        report_type=row["report_type"],
        original_filename=row["original_filename"],
        uploaded_at=row["uploaded_at"],
    )


def _analysis_from_row(row: dict[str, Any]) -> AnalysisRecord:
    return AnalysisRecord(
        id=str(row["id"]),
        report_id=str(row["report_id"]),
        ai_summary=row["ai_summary"],
        ai_doctor_explanation=row["ai_doctor_explanation"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _visualization_from_row(row: dict[str, Any]) -> VisualizationRecord:
    return VisualizationRecord(
        id=str(row["id"]),
        report_id=str(row["report_id"]),
        chart_data=row["chart_data"],
        metrics=row["metrics"] or {},
        visual_notes=row["visual_notes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _image_from_row(row: dict[str, Any]) -> ImageRecord:
    return ImageRecord(
        id=str(row["id"]),
        report_id=str(row["report_id"]),
        image_url=row["image_url"],
        model_used=row["model_used"],
        prompt=row["prompt"],
        created_at=row["created_at"],
    )

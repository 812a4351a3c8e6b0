import asyncio
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from reportflow.analysis.analyzer import ReportAnalyzer
from reportflow.analysis.example_client_adapter import ExampleClientAdapter
from reportflow.config.settings import Settings
from reportflow.extraction.models import (
    DocumentFormat,
    ExtractedText,
    ExtractionMetadata,
    ExtractionMethod,
)
from reportflow.extraction.text_extractor import TextExtractor
from reportflow.imaging.base import BaseImageClient
from reportflow.imaging.exceptions import ImageGenError
from reportflow.imaging.generator import IllustrationGenerator
from reportflow.imaging.models import GeneratedImage
from reportflow.ocr.exceptions import OCRError, OCRErrorReason
from reportflow.processor.pipeline import PipelineContext, PipelineStep
from reportflow.processor.processor import ReportProcessor, build_report_processor
from reportflow.processor.steps import (
    NO_TEXT_MESSAGE,
    AnalyzeStep,
    ExtractTextStep,
    IllustrateStep,
    PersistAnalysisStep,
    PersistImagesStep,
    PersistVisualizationStep,
)
from reportflow.storage.exceptions import RecordStoreError, ReportNotFoundError
from reportflow.storage.memory_store import MemoryRecordStore

REPORT_TEXT = (
    "MRI lumbar spine. Patient: PERSON_1. findings: mild disc bulge at L4-L5. "
    "impression: mild degenerative disc disease."
)


def _extracted(text: str = REPORT_TEXT) -> ExtractedText:
    return ExtractedText(
        text=text,
        confidence=0.95,
        extraction_method=ExtractionMethod.OCR,
        metadata=ExtractionMetadata(format=DocumentFormat.IMAGE, is_valid_medical=True),
    )


def _make_pipeline(
    store: MemoryRecordStore | None = None,
    image_client: BaseImageClient | None = None,
    illustration_required: bool = True,
    stage_timeout_seconds: float = 5.0,
) -> tuple[ReportProcessor, MagicMock, MagicMock, MemoryRecordStore]:
    store = store if store is not None else MemoryRecordStore()
    extractor = MagicMock(spec=TextExtractor)
    extractor.extract_text = AsyncMock(return_value=_extracted())
    analyzer = ReportAnalyzer(client=ExampleClientAdapter(), model="example")

    if image_client is None:
        image_client = MagicMock(spec=BaseImageClient)
        image_client.generate = AsyncMock(return_value="https://img.test/1.png")
    generator = IllustrationGenerator(client=image_client)

    steps: list[PipelineStep] = [
        ExtractTextStep(extractor),
        AnalyzeStep(analyzer),
        PersistAnalysisStep(store),
        PersistVisualizationStep(store),
        IllustrateStep(analyzer, generator, required=illustration_required),
        PersistImagesStep(store),
    ]
    processor = ReportProcessor(
        steps=steps, store=store, stage_timeout_seconds=stage_timeout_seconds
    )
    return processor, extractor, image_client, store


async def _new_report(store: MemoryRecordStore) -> str:
    report = await store.insert_report(file_url="/tmp/scan.jpg", report_type="MRI")
    return report.id


class TestProcessReport:
    async def test_runs_all_stages_and_persists_outputs(self) -> None:
        processor, extractor, image_client, store = _make_pipeline()
        report_id = await _new_report(store)

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is True
        assert result.error is None
        extractor.extract_text.assert_awaited_once_with("/tmp/scan.jpg", "image/jpeg")
        analysis = await store.get_analysis(report_id)
        visualization = await store.get_visualization(report_id)
        images = await store.list_images(report_id)
        assert analysis is not None and result.analysis_id == analysis.id
        assert visualization is not None and result.visualization_id == visualization.id
        assert result.image_ids == [images[0].id]
        assert images[0].prompt == ExampleClientAdapter.DEFAULT_IMAGE_PROMPT
        assert analysis.ai_summary == ExampleClientAdapter.DEFAULT_RESPONSE["detailedAnalysis"]

    async def test_unsupported_mime_type_fails_without_io(self) -> None:
        processor, extractor, _, store = _make_pipeline()
        report_id = await _new_report(store)

        result = await processor.process_report(report_id, "/tmp/notes.txt", "text/plain", "MRI")

        assert result.success is False
        assert result.error == "Unsupported file type: text/plain"
        assert result.analysis_id == ""
        extractor.extract_text.assert_not_called()
        assert store.analyses == {}

    async def test_blank_extraction_fails_before_analysis(self) -> None:
        processor, extractor, _, store = _make_pipeline()
        report_id = await _new_report(store)
        extractor.extract_text.return_value = _extracted("  \n ")

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is False
        assert result.error == NO_TEXT_MESSAGE
        assert store.analyses == {}

    async def test_extraction_error_message_is_carried(self) -> None:
        processor, extractor, _, store = _make_pipeline()
        report_id = await _new_report(store)
        extractor.extract_text.side_effect = OCRError(
            "OCR failed: No text could be extracted from the image", OCRErrorReason.NO_TEXT
        )

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/png", "MRI")

        assert result.success is False
        assert result.error == "OCR failed: No text could be extracted from the image"

    async def test_image_failure_keeps_analysis_and_visualization(self) -> None:
        image_client = MagicMock(spec=BaseImageClient)
        image_client.generate = AsyncMock(side_effect=ImageGenError("quota exceeded"))
        processor, _, _, store = _make_pipeline(image_client=image_client)
        report_id = await _new_report(store)

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is False
        assert result.error is not None and "quota exceeded" in result.error
        assert result.analysis_id
        assert result.visualization_id
        assert result.image_ids == []
        assert await store.get_analysis(report_id) is not None
        assert await store.get_visualization(report_id) is not None

    async def test_optional_illustration_failure_still_succeeds(self) -> None:
        image_client = MagicMock(spec=BaseImageClient)
        image_client.generate = AsyncMock(side_effect=ImageGenError("quota exceeded"))
        processor, _, _, store = _make_pipeline(
            image_client=image_client, illustration_required=False
        )
        report_id = await _new_report(store)

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is True
        assert result.image_ids == []

    async def test_optional_illustration_survives_unexpected_client_error(self) -> None:
        image_client = MagicMock(spec=BaseImageClient)
        image_client.generate = AsyncMock(side_effect=RuntimeError("connection reset"))
        processor, _, _, store = _make_pipeline(
            image_client=image_client, illustration_required=False
        )
        report_id = await _new_report(store)

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is True
        assert result.image_ids == []
        assert await store.get_analysis(report_id) is not None

    async def test_persistence_failure_message_is_verbatim(self) -> None:
        store = MemoryRecordStore()
        report_id = await _new_report(store)
        store.upsert_visualization = AsyncMock(  # type: ignore[method-assign]
            side_effect=RecordStoreError("Failed to save visualization data: disk full")
        )
        processor, _, _, _ = _make_pipeline(store=store)

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is False
        assert result.error == "Failed to save visualization data: disk full"
        assert result.analysis_id
        assert result.visualization_id == ""

    async def test_unknown_report_fails_at_first_write(self) -> None:
        processor, _, _, store = _make_pipeline()

        result = await processor.process_report(
            "no-such-report", "/tmp/scan.jpg", "image/jpeg", "MRI"
        )

        assert result.success is False
        assert result.error == "Failed to save analysis: report no-such-report does not exist"
        assert store.analyses == {}

    async def test_stage_timeout_fails_run(self) -> None:
        processor, extractor, _, store = _make_pipeline(stage_timeout_seconds=0.01)
        report_id = await _new_report(store)

        async def slow(*args: object) -> ExtractedText:
            await asyncio.sleep(1)
            return _extracted()

        extractor.extract_text.side_effect = slow

        result = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert result.success is False
        assert result.error == "Stage 'extract_text' timed out after 0.01s"

    async def test_rerun_upserts_and_appends_image(self) -> None:
        processor, _, _, store = _make_pipeline()
        report_id = await _new_report(store)

        first = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")
        second = await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert second.analysis_id == first.analysis_id
        assert second.visualization_id == first.visualization_id
        assert len(store.analyses) == 1
        assert len(await store.list_images(report_id)) == 2

    async def test_concurrent_runs_do_not_share_state(self) -> None:
        processor, _, _, store = _make_pipeline()
        report_ids = [await _new_report(store) for _ in range(3)]

        results = await asyncio.gather(
            *(
                processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")
                for report_id in report_ids
            )
        )

        assert all(result.success for result in results)
        assert len({result.analysis_id for result in results}) == 3
        for report_id, result in zip(report_ids, results):
            assert [image.id for image in await store.list_images(report_id)] == result.image_ids


class TestProcessedReport:
    async def test_round_trip(self) -> None:
        processor, _, _, store = _make_pipeline()
        report = await store.insert_report(file_url="/tmp/scan.jpg", report_type="MRI")

        result = await processor.process_report(report.id, report.file_url, "image/jpeg", "MRI")
        processed = await processor.get_processed_report(report.id)

        assert processed.report.id == report.id
        assert processed.analysis is not None
        assert processed.analysis.id == result.analysis_id
        assert processed.visualization is not None
        assert processed.visualization.id == result.visualization_id
        assert processed.visualization.metrics == (
            ExampleClientAdapter.DEFAULT_RESPONSE["visualizationData"]["metrics"]  # type: ignore[index]
        )
        assert [image.id for image in processed.images] == result.image_ids
        assert len(processed.images) == 1

    async def test_missing_report_raises(self) -> None:
        processor, _, _, _ = _make_pipeline()

        with pytest.raises(ReportNotFoundError, match="Report r404 not found"):
            await processor.get_processed_report("r404")

    async def test_unprocessed_report_has_empty_parts(self) -> None:
        processor, _, _, store = _make_pipeline()
        report = await store.insert_report(file_url="/tmp/scan.jpg", report_type="MRI")

        processed = await processor.get_processed_report(report.id)

        assert processed.analysis is None
        assert processed.visualization is None
        assert processed.images == []


class TestIsReportProcessed:
    async def test_true_after_full_run(self) -> None:
        processor, _, _, store = _make_pipeline()
        report_id = await _new_report(store)
        await processor.process_report(report_id, "/tmp/scan.jpg", "image/jpeg", "MRI")

        assert await processor.is_report_processed(report_id) is True

    async def test_false_without_images(self) -> None:
        store = MemoryRecordStore()
        report_id = await _new_report(store)
        await store.upsert_analysis(report_id, ai_summary="a", ai_doctor_explanation="b")
        await store.upsert_visualization(report_id, chart_data=[], metrics={}, visual_notes="")
        processor, _, _, _ = _make_pipeline(store=store)

        assert await processor.is_report_processed(report_id) is False

    async def test_false_on_store_error(self) -> None:
        store = MemoryRecordStore()
        store.get_analysis = AsyncMock(side_effect=RecordStoreError("down"))  # type: ignore[method-assign]
        processor, _, _, _ = _make_pipeline(store=store)

        assert await processor.is_report_processed("r1") is False


class TestSteps:
    async def test_analyze_requires_extracted_text(self) -> None:
        step = AnalyzeStep(ReportAnalyzer(client=ExampleClientAdapter(), model="example"))
        context = PipelineContext(
            report_id="r1", file_uri="f", mime_type="image/png", report_type="MRI"
        )

        with pytest.raises(ValueError, match="extracted"):
            await step.run(context)

    async def test_persist_images_writes_each_illustration(self) -> None:
        store = MemoryRecordStore()
        context = PipelineContext(
            report_id=await _new_report(store),
            file_uri="f",
            mime_type="image/png",
            report_type="MRI",
        )
        context.illustrations = [
            GeneratedImage(
                url=f"https://img.test/{n}.png",
                prompt="p",
                model="dall-e-3",
                generated_at=datetime.now(timezone.utc),
            )
            for n in range(2)
        ]

        context = await PersistImagesStep(store).run(context)

        assert len(context.image_ids) == 2
        assert [image.image_url for image in store.images] == [
            "https://img.test/0.png",
            "https://img.test/1.png",
        ]


class TestBuildReportProcessor:
    async def test_example_providers_process_a_real_pdf(
        self, tmp_path: Path, report_pdf_bytes: bytes
    ) -> None:
        pdf_path = tmp_path / "report.pdf"
        pdf_path.write_bytes(report_pdf_bytes)
        settings = Settings(
            record_store="memory",
            ocr_provider="example",
            analysis_provider="example",
            image_provider="example",
        )

        async with build_report_processor(settings) as processor:
            report = await processor.store.insert_report(
                file_url=pdf_path.as_uri(), report_type="MRI"
            )
            result = await processor.process_report(
                report.id, pdf_path.as_uri(), "application/pdf", "MRI"
            )
            processed = await processor.is_report_processed(report.id)

        assert result.success is True, result.error
        assert processed is True

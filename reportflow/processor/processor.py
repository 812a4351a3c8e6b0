import asyncio
from types import TracebackType

from reportflow.analysis.factory import AnalyzerFactory
from reportflow.config.settings import Settings
from reportflow.extraction.exceptions import UnsupportedTypeError
from reportflow.extraction.text_extractor import TextExtractor, is_supported_mime_type
from reportflow.imaging.factory import ImageGeneratorFactory
from reportflow.logging.logger import Log
from reportflow.ocr.factory import OcrClientFactory
from reportflow.pdf.factory import PdfExtractorFactory
from reportflow.processor.exceptions import StageTimeoutError
from reportflow.processor.file_loader import FileLoader
from reportflow.processor.models import ProcessedReport, ProcessingResult
from reportflow.processor.pipeline import PipelineContext, PipelineStep
from reportflow.processor.steps import (
    AnalyzeStep,
    ExtractTextStep,
    IllustrateStep,
    PersistAnalysisStep,
    PersistImagesStep,
    PersistVisualizationStep,
)
from reportflow.storage.base import BaseRecordStore
from reportflow.storage.exceptions import RecordStoreError, ReportNotFoundError
from reportflow.storage.factory import RecordStoreFactory


class ReportProcessor:
    """Runs the report pipeline and reads back what it produced.

    Pipeline: extract -> analyze -> persist analysis -> persist visualization
    -> illustrate -> persist image. Steps run strictly in order, each under
    its own timeout. Nothing written by an earlier step is rolled back when a
    later one fails; re-running with the same report id upserts.
    """

    def __init__(
        self,
        *,
        steps: list[PipelineStep],
        store: BaseRecordStore,
        stage_timeout_seconds: float = 120.0,
    ) -> None:
        self._steps = steps
        self._store = store
        self._stage_timeout_seconds = stage_timeout_seconds

    @property
    def store(self) -> BaseRecordStore:
        return self._store

    async def __aenter__(self) -> "ReportProcessor":
        await self._store.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._store.close()

    async def process_report(
        self,
        report_id: str,
        file_uri: str,
        mime_type: str,
        report_type: str,
    ) -> ProcessingResult:
        """Run every stage for one report. Never raises; failures are in the result."""
        Log.info(f"Processing report {report_id} ({mime_type}, {report_type})", report_id=report_id)
        context = PipelineContext(
            report_id=report_id,
            file_uri=file_uri,
            mime_type=mime_type,
            report_type=report_type,
        )

        if not is_supported_mime_type(mime_type):
            context.error_message = str(UnsupportedTypeError(mime_type))
            Log.error(f"Report {report_id} rejected: {context.error_message}", report_id=report_id)
            return self._result(context)

        for step in self._steps:
            try:
                context = await self._run_step(step, context)
            except Exception as exc:
                context.error_message = str(exc) or type(exc).__name__
                Log.error(
                    f"Report {report_id} failed at stage '{step.name}': {context.error_message}",
                    report_id=report_id,
                    stage=step.name,
                )
                return self._result(context)

        Log.info(
            f"Report {report_id} processed: analysis {context.analysis_id}, "
            f"visualization {context.visualization_id}, {len(context.image_ids)} images",
            report_id=report_id,
        )
        return self._result(context)

    async def get_processed_report(self, report_id: str) -> ProcessedReport:
        """Join a report with its analysis, visualization and images.

        Raises:
            ReportNotFoundError: if the base report does not exist.
            RecordStoreError: if any read fails.
        """
        report = await self._store.get_report(report_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} not found")
        analysis, visualization, images = await asyncio.gather(
            self._store.get_analysis(report_id),
            self._store.get_visualization(report_id),
            self._store.list_images(report_id),
        )
        return ProcessedReport(
            report=report,
            analysis=analysis,
            visualization=visualization,
            images=images,
        )

    async def is_report_processed(self, report_id: str) -> bool:
        """True iff analysis, visualization and at least one image exist."""
        try:
            analysis, visualization, images = await asyncio.gather(
                self._store.get_analysis(report_id),
                self._store.get_visualization(report_id),
                self._store.list_images(report_id),
            )
        except RecordStoreError as exc:
            Log.warning(f"Could not check processing status of report {report_id}: {exc}")
            return False
        return analysis is not None and visualization is not None and len(images) > 0

    async def _run_step(self, step: PipelineStep, context: PipelineContext) -> PipelineContext:
        Log.debug(f"Running stage '{step.name}' for report {context.report_id}")
        try:
            return await asyncio.wait_for(step.run(context), timeout=self._stage_timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise StageTimeoutError(
                f"Stage '{step.name}' timed out after {self._stage_timeout_seconds}s"
            ) from exc

    @staticmethod
    def _result(context: PipelineContext) -> ProcessingResult:
        return ProcessingResult(
            report_id=context.report_id,
            analysis_id=context.analysis_id,
            visualization_id=context.visualization_id,
            image_ids=list(context.image_ids),
            success=not context.error_message,
            error=context.error_message or None,
        )


def build_text_extractor(settings: Settings) -> TextExtractor:
    """Build the standalone extractor, e.g. for an extracted-text preview."""
    file_loader = FileLoader(timeout_seconds=settings.file_download_timeout_seconds)
    ocr_client = OcrClientFactory.create(settings, file_loader=file_loader)
    pdf_service = PdfExtractorFactory.create_service(settings, ocr_client, file_loader)
    return TextExtractor(
        file_loader=file_loader,
        ocr_client=ocr_client,
        pdf_service=pdf_service,
        language=settings.ocr_language_hints[0] if settings.ocr_language_hints else None,
    )


def build_report_processor(
    settings: Settings,
    store: BaseRecordStore | None = None,
) -> ReportProcessor:
    """Build a ReportProcessor with all adapters selected by settings."""
    Log.configure(settings.log_level)
    extractor = build_text_extractor(settings)
    analyzer = AnalyzerFactory.create(settings)
    generator = ImageGeneratorFactory.create(settings)
    record_store = store if store is not None else RecordStoreFactory.create(settings)

    steps: list[PipelineStep] = [
        ExtractTextStep(extractor),
        AnalyzeStep(analyzer),
        PersistAnalysisStep(record_store),
        PersistVisualizationStep(record_store),
        IllustrateStep(analyzer, generator, required=settings.illustration_required),
        PersistImagesStep(record_store),
    ]
    return ReportProcessor(
        steps=steps,
        store=record_store,
        stage_timeout_seconds=settings.stage_timeout_seconds,
    )

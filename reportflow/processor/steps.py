from reportflow.analysis.analyzer import ReportAnalyzer
from reportflow.extraction.text_extractor import TextExtractor
from reportflow.imaging.exceptions import ImageGenError
from reportflow.imaging.generator import IllustrationGenerator
from reportflow.logging.logger import Log
from reportflow.processor.exceptions import EmptyExtractionError
from reportflow.processor.pipeline import PipelineContext, PipelineStep
from reportflow.storage.base import BaseRecordStore

NO_TEXT_MESSAGE = "No text could be extracted from the file"


class ExtractTextStep(PipelineStep):
    name = "extract_text"

    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        extracted = await self._extractor.extract_text(context.file_uri, context.mime_type)
        if not extracted.text.strip():
            raise EmptyExtractionError(NO_TEXT_MESSAGE)
        context.extracted = extracted
        Log.info(
            f"Extracted {len(extracted.text)} chars for report {context.report_id} "
            f"({extracted.extraction_method.value})",
            report_id=context.report_id,
        )
        return context


class AnalyzeStep(PipelineStep):
    name = "analyze"

    def __init__(self, analyzer: ReportAnalyzer) -> None:
        self._analyzer = analyzer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before analysis")
        context.analysis = await self._analyzer.analyze_report(
            context.extracted.text, context.report_type
        )
        if context.analysis.is_fallback:
            Log.warning(
                f"Report {context.report_id} analyzed with fallback payload",
                report_id=context.report_id,
            )
        return context


class PersistAnalysisStep(PipelineStep):
    name = "persist_analysis"

    def __init__(self, store: BaseRecordStore) -> None:
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before persist")
        record = await self._store.upsert_analysis(
            context.report_id,
            ai_summary=context.analysis.detailed_analysis,
            ai_doctor_explanation=context.analysis.doctor_script,
        )
        context.analysis_id = record.id
        return context


class PersistVisualizationStep(PipelineStep):
    name = "persist_visualization"

    def __init__(self, store: BaseRecordStore) -> None:
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before persist")
        visualization = context.analysis.visualization_data
        record = await self._store.upsert_visualization(
            context.report_id,
            chart_data=visualization.chart_data,
            metrics=visualization.metrics,
            visual_notes=visualization.visual_notes,
        )
        context.visualization_id = record.id
        return context


class IllustrateStep(PipelineStep):
    """Derives an image prompt and generates one illustration.

    With ``required=False`` a generation failure is logged and the run
    continues without images.
    """

    name = "illustrate"

    def __init__(
        self,
        analyzer: ReportAnalyzer,
        generator: IllustrationGenerator,
        required: bool = True,
    ) -> None:
        self._analyzer = analyzer
        self._generator = generator
        self._required = required

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before illustration")
        context.image_prompt = await self._analyzer.generate_image_prompt(
            context.analysis.detailed_analysis, context.report_type
        )
        try:
            image = await self._generator.generate_medical_illustration(context.image_prompt)
        except ImageGenError as exc:
            if self._required:
                raise
            Log.warning(
                f"Skipping illustration for report {context.report_id}: {exc}",
                report_id=context.report_id,
            )
            return context
        context.illustrations.append(image)
        return context


class PersistImagesStep(PipelineStep):
    name = "persist_images"

    def __init__(self, store: BaseRecordStore) -> None:
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        for image in context.illustrations:
            record = await self._store.insert_image(
                context.report_id,
                image_url=image.url,
                model_used=image.model,
                prompt=image.prompt,
            )
            context.image_ids.append(record.id)
        return context

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from reportflow.analysis.models import AnalysisResult
from reportflow.extraction.models import ExtractedText
from reportflow.imaging.models import GeneratedImage


@dataclass(slots=True)
class PipelineContext:
    report_id: str
    file_uri: str
    mime_type: str
    report_type: str
    extracted: ExtractedText | None = None
    analysis: AnalysisResult | None = None
    analysis_id: str = ""
    visualization_id: str = ""
    image_prompt: str = ""
    illustrations: list[GeneratedImage] = field(default_factory=list)
    image_ids: list[str] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    name: str = "step"

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

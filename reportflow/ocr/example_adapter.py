"""Example OCR adapter.

No network calls. Returns a fixed MRI report so the whole pipeline can run
locally without a Vision API key.
"""

from typing import ClassVar

from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.models import OCRResult


class ExampleOcrAdapter(BaseOcrClient):
    """Returns the same sample report text for every image."""

    SAMPLE_TEXT: ClassVar[str] = (
        "MAGNETIC RESONANCE IMAGING REPORT\n"
        "Patient: PERSON_1\n"
        "Study Type: MRI Lumbar Spine\n"
        "CLINICAL HISTORY: Lower back pain with radiation to left leg.\n"
        "TECHNIQUE: Sagittal T1, T2, and STIR sequences.\n"
        "FINDINGS: L4-L5: Mild disc height loss with posterior disc bulge. "
        "No significant central canal stenosis.\n"
        "IMPRESSION: Mild degenerative disc disease at L4-L5.\n"
        "RECOMMENDATION: Clinical correlation recommended."
    )
    CONFIDENCE: ClassVar[float] = 0.95

    async def extract_text_from_image(self, image: bytes | str) -> OCRResult:
        _ = image
        return OCRResult(text=self.SAMPLE_TEXT, confidence=self.CONFIDENCE)

"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from reportflow.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Returns a fixed valid analysis JSON, or a fixed illustration prompt.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "detailedAnalysis": (
            "Mild degenerative disc disease at L4-L5 with a posterior disc bulge. "
            "No significant spinal stenosis."
        ),
        "visualizationData": {
            "chartData": [
                {"label": "L4-L5 disc height", "value": 70},
                {"label": "L5-S1 disc height", "value": 100},
            ],
            "metrics": {"Disc bulge": "L4-L5", "Stenosis": "None"},
            "visualNotes": "L4-L5 shows mild height loss compared with L5-S1.",
        },
        "doctorScript": (
            "Hello! Your scan shows some mild wear in one disc of your lower back. "
            "This is common and usually managed with physical therapy."
        ),
    }
    DEFAULT_IMAGE_PROMPT: ClassVar[str] = (
        "Sagittal cross-section illustration of the lumbar spine highlighting a mild "
        "disc bulge at L4-L5, clean educational medical style, labeled vertebrae"
    )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_response: bool,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        if json_response:
            return json.dumps(self.DEFAULT_RESPONSE)
        return self.DEFAULT_IMAGE_PROMPT

"""AI-powered medical report analyzer with a deterministic fallback."""

import asyncio
import json
from pathlib import Path
from typing import Any

from reportflow.analysis.client_base import BaseAnalysisClient
from reportflow.analysis.exceptions import AnalysisError
from reportflow.analysis.fallback import build_fallback_analysis, fallback_image_prompt
from reportflow.analysis.models import AnalysisResult
from reportflow.analysis.prompt_loader import load_analysis_prompt, load_image_prompt
from reportflow.analysis.validator import validate_and_build
from reportflow.logging.logger import Log

SYSTEM_PROMPT = (
    "You are a careful medical assistant. You explain reports to patients "
    "in plain language and never invent values that are not in the report."
)


class ReportAnalyzer:
    """Turns extracted report text into an AnalysisResult.

    ``analyze_report`` and ``generate_image_prompt`` never raise: every
    failure is logged and replaced with a fixed payload so the pipeline
    always has something well-formed to persist.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.7,
        call_timeout_seconds: float = 60.0,
        analysis_prompt_path: Path | None = None,
        image_prompt_path: Path | None = None,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._call_timeout_seconds = call_timeout_seconds
        self._system_prompt = system_prompt
        self._analysis_template = load_analysis_prompt(analysis_prompt_path)
        self._image_template = load_image_prompt(image_prompt_path)

    async def analyze_report(self, text: str, report_type: str) -> AnalysisResult:
        try:
            prompt = self._analysis_template.format(report_type=report_type, report_text=text)
            raw_response = await self._call_ai(prompt, json_response=True)
            Log.debug(f"AI raw analysis response:\n{raw_response}")
            result = validate_and_build(self._parse_json(raw_response))
        except Exception as exc:
            Log.warning(f"Analysis failed, using fallback payload: {exc}")
            return build_fallback_analysis(report_type)

        Log.info(
            f"Analysis complete: {len(result.detailed_analysis)} chars, "
            f"{len(result.visualization_data.metrics)} metrics"
        )
        return result

    async def generate_image_prompt(self, analysis_text: str, report_type: str) -> str:
        try:
            prompt = self._image_template.format(
                report_type=report_type, analysis_text=analysis_text
            )
            content = (await self._call_ai(prompt, json_response=False)).strip()
        except Exception as exc:
            Log.warning(f"Image prompt generation failed, using template: {exc}")
            return fallback_image_prompt(report_type)

        if not content:
            Log.warning("Image prompt generation returned nothing, using template")
            return fallback_image_prompt(report_type)
        return content

    async def _call_ai(self, prompt: str, *, json_response: bool) -> str:
        try:
            return await asyncio.wait_for(
                self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt=self._system_prompt,
                    user_prompt=prompt,
                    json_response=json_response,
                ),
                timeout=self._call_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise AnalysisError(
                f"AI call timed out after {self._call_timeout_seconds}s"
            ) from exc

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisError("JSON response must be an object")
        return parsed

"""Google Cloud Vision OCR adapter (images:annotate REST endpoint)."""

import base64
from typing import Any

import httpx

from reportflow.logging.logger import Log
from reportflow.ocr.base import BaseOcrClient
from reportflow.ocr.exceptions import OCRError, OCRErrorReason
from reportflow.ocr.models import BoundingBox, OCRResult, Vertex
from reportflow.processor.file_loader import FileLoader

DEFAULT_FLAT_CONFIDENCE = 0.8


class GoogleVisionAdapter(BaseOcrClient):
    """Extracts text from images with TEXT_DETECTION + DOCUMENT_TEXT_DETECTION."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        language_hints: list[str] | None = None,
        timeout_seconds: float = 30.0,
        file_loader: FileLoader | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._language_hints = language_hints if language_hints is not None else ["en"]
        self._timeout_seconds = timeout_seconds
        self._file_loader = file_loader if file_loader is not None else FileLoader()
        self._transport = transport

    async def extract_text_from_image(self, image: bytes | str) -> OCRResult:
        image_bytes = await self._load(image)
        payload = self._build_request(image_bytes)
        Log.debug(f"Sending {len(image_bytes)} image bytes to Google Vision")

        data = await self._post(payload)
        result = self._parse_response(data)
        Log.info(
            f"OCR completed: {len(result.text)} chars, confidence {result.confidence:.2f}"
        )
        return result

    async def _load(self, image: bytes | str) -> bytes:
        if isinstance(image, bytes):
            return image
        try:
            return await self._file_loader.load(image)
        except Exception as exc:
            raise OCRError(f"OCR failed: could not read image: {exc}") from exc

    def _build_request(self, image_bytes: bytes) -> dict[str, Any]:
        return {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                    "features": [
                        {"type": "TEXT_DETECTION", "maxResults": 1},
                        {"type": "DOCUMENT_TEXT_DETECTION", "maxResults": 1},
                    ],
                    "imageContext": {"languageHints": self._language_hints},
                }
            ]
        }

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    self._base_url,
                    params={"key": self._api_key},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise OCRError(
                f"OCR failed: network error: {exc}", OCRErrorReason.NETWORK
            ) from exc

        if response.status_code >= 400:
            message = _error_message(response)
            raise OCRError(
                f"OCR failed: Google Vision API error {response.status_code} - {message}",
                _classify(response.status_code, message),
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise OCRError("OCR failed: response is not valid JSON") from exc
        if not isinstance(data, dict):
            raise OCRError("OCR failed: response must be a JSON object")
        return data

    @staticmethod
    def _parse_response(data: dict[str, Any]) -> OCRResult:
        responses = data.get("responses") or []
        annotations = responses[0] if responses else None
        if not annotations:
            raise OCRError("OCR failed: No text detected", OCRErrorReason.NO_TEXT)
        if annotations.get("error"):
            message = annotations["error"].get("message", "Unknown error")
            raise OCRError(f"OCR failed: Vision API error: {message}", _classify(None, message))

        full_text = annotations.get("fullTextAnnotation")
        text_annotations = annotations.get("textAnnotations") or []
        text = ""
        confidence = 0.0
        boxes: list[BoundingBox] = []

        if full_text:
            text = full_text.get("text") or ""
            pages = full_text.get("pages") or []
            if pages:
                confidence = sum(p.get("confidence", 0.0) or 0.0 for p in pages) / len(pages)
        elif text_annotations:
            first = text_annotations[0]
            text = first.get("description") or ""
            confidence = first.get("score") or DEFAULT_FLAT_CONFIDENCE
            for annotation in text_annotations[1:]:
                vertices = (annotation.get("boundingPoly") or {}).get("vertices")
                if vertices:
                    boxes.append(
                        BoundingBox(
                            text=annotation.get("description", ""),
                            vertices=[Vertex(x=v.get("x", 0), y=v.get("y", 0)) for v in vertices],
                        )
                    )

        if not text.strip():
            raise OCRError(
                "OCR failed: No text could be extracted from the image",
                OCRErrorReason.NO_TEXT,
            )
        return OCRResult(
            text=text.strip(),
            confidence=float(confidence),
            bounding_boxes=boxes or None,
        )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or "Unknown error")
    return "Unknown error"


def _classify(status_code: int | None, message: str) -> OCRErrorReason:
    lowered = message.lower()
    if status_code in (401, 403) or "api key" in lowered:
        return OCRErrorReason.AUTH
    if status_code == 429 or "quota" in lowered:
        return OCRErrorReason.QUOTA
    return OCRErrorReason.API

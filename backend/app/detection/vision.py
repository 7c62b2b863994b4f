"""
Remote vision detector.

Vision models are asked for JSON but often wrap it in a markdown fence or
add prose around it, so the reply is parsed permissively.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from app.detection.base import IngredientDetector, RawDetection
from app.schemas.recipes import DetectionProvenance
from app.services.vision_client import VisionClient

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```json\s*(.*?)```", re.IGNORECASE | re.DOTALL)
FENCED_ANY = re.compile(r"```[\w-]*\s*(.*?)```", re.DOTALL)
JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

DEFAULT_VISION_CONFIDENCE = 0.6


class VisionPayloadError(ValueError):
    """Vision reply did not contain usable JSON."""


def extract_json_text(text: str) -> str:
    """Body of a ```json fence, else of any fence, else the stripped text."""
    for pattern in (FENCED_JSON, FENCED_ANY):
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return text.strip()


def _load_json(text: str) -> Any:
    candidate = extract_json_text(text or "")
    try:
        return json.loads(candidate)
    except ValueError:
        pass

    # Prose around a bare object
    match = JSON_OBJECT.search(candidate)
    if not match:
        raise VisionPayloadError("No JSON found in vision reply")
    try:
        return json.loads(match.group(0))
    except ValueError as e:
        raise VisionPayloadError(f"Invalid JSON in vision reply: {e}") from e


def _string_items(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item.strip())


def coerce_confidence(value: Any, default: float = DEFAULT_VISION_CONFIDENCE) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return min(1.0, max(0.0, float(value)))


def parse_vision_reply(text: str) -> RawDetection:
    data = _load_json(text)

    if isinstance(data, list):
        return RawDetection(
            english=_string_items(data),
            confidence=DEFAULT_VISION_CONFIDENCE,
            provenance=DetectionProvenance.EXTERNAL_VISION,
        )
    if not isinstance(data, dict):
        raise VisionPayloadError(f"Unexpected JSON type in vision reply: {type(data).__name__}")

    english = data.get("ingredients_en")
    if english is None:
        english = data.get("ingredients")

    return RawDetection(
        english=_string_items(english),
        japanese=_string_items(data.get("ingredients_jp")),
        confidence=coerce_confidence(data.get("confidence")),
        provenance=DetectionProvenance.EXTERNAL_VISION,
    )


class VisionDetector(IngredientDetector):
    def __init__(self, client: VisionClient):
        self.client = client

    async def analyze(self, image: bytes, mime_type: Optional[str] = "image/jpeg") -> RawDetection:
        text = await self.client.classify(image, mime_type or "image/jpeg")
        detection = parse_vision_reply(text)
        logger.info(
            "Vision (%s) detected %d en / %d jp terms",
            self.client.name,
            len(detection.english),
            len(detection.japanese),
        )
        return detection

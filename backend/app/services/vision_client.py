"""
Vision client abstraction for remote ingredient detection.

Each client sends one image plus a fixed prompt and returns the model's raw
text reply. Parsing that reply is the detector's job.
"""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from openai import AsyncOpenAI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


VISION_PROMPT = """You are an expert culinary vision assistant. Identify visible raw ingredients (not dishes) in the photo.
- Return a compact JSON object only, no prose.
- Keys: ingredients_en (array of lowercase English words), ingredients_jp (array of Japanese strings as users would type: katakana for foreign items, kanji where common), confidence (0..1).
- Avoid brand names and utensils."""


class VisionClientError(Exception):
    """Vision backend not configured, unreachable or returned no text."""


class VisionClient(ABC):
    """Abstract base class for vision providers."""

    name: str = "vision"

    @abstractmethod
    async def classify(self, image: bytes, mime_type: str = "image/jpeg") -> str:
        """Return the raw text reply for the image."""
        raise NotImplementedError


class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI chat completions with image input."""

    name = "openai"

    def __init__(self, model: Optional[str] = None, api_key: Optional[str] = None):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_vision_model
        self.timeout = settings.vision_timeout
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def classify(self, image: bytes, mime_type: str = "image/jpeg") -> str:
        if not self.api_key:
            raise VisionClientError("OpenAI API key not configured")

        data_url = f"data:{mime_type};base64,{base64.b64encode(image).decode('ascii')}"
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": VISION_PROMPT},
                            {"type": "image_url", "image_url": {"url": data_url}},
                        ],
                    }
                ],
                temperature=0,
                max_tokens=400,
            )
        except Exception as e:
            raise VisionClientError(f"OpenAI vision call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise VisionClientError("OpenAI vision call returned no text")
        return content


class GeminiVisionClient(VisionClient):
    """Vision client backed by the Gemini generateContent REST endpoint."""

    name = "gemini"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_api_base).rstrip("/")
        self.timeout = settings.vision_timeout

    async def classify(self, image: bytes, mime_type: str = "image/jpeg") -> str:
        if not self.api_key:
            raise VisionClientError("Gemini API key not configured")

        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": VISION_PROMPT},
                        {
                            "inline_data": {
                                "mime_type": mime_type or "image/jpeg",
                                "data": base64.b64encode(image).decode("ascii"),
                            }
                        },
                    ],
                }
            ]
        }
        url = f"{self.base_url}/models/{self.model}:generateContent"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise VisionClientError(f"Gemini vision call failed: {e}") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise VisionClientError(f"Unexpected Gemini response shape: {e}") from e


def get_vision_client(provider: Optional[str] = None) -> VisionClient:
    """Factory returning the configured vision client."""
    provider = provider or get_settings().vision_provider

    if provider == "gemini":
        return GeminiVisionClient()

    if provider != "openai":
        logger.warning("Unknown vision provider '%s', using openai", provider)
    return OpenAIVisionClient()

"""
Detector strategy interface.

A detector turns image bytes into unnormalized ingredient guesses.
Normalization, language fill-in and failure handling live in the adapter,
so a real classifier can replace any strategy without touching callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from app.schemas.recipes import DetectionProvenance


@dataclass(frozen=True)
class RawDetection:
    english: tuple[str, ...] = field(default_factory=tuple)
    japanese: tuple[str, ...] = field(default_factory=tuple)
    confidence: Optional[float] = None
    provenance: DetectionProvenance = DetectionProvenance.LOCAL_HEURISTIC


class IngredientDetector(ABC):
    @abstractmethod
    async def analyze(self, image: bytes, mime_type: str = "image/jpeg") -> RawDetection:
        """Guess ingredients. May raise; the adapter recovers."""
        raise NotImplementedError

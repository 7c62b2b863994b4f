"""
Detector Adapter
================

Single entry point for image-based ingredient detection.

Flow:
  1) Dispatch to the selected strategy (local heuristic or remote vision)
  2) Normalize English terms, fill Japanese via the lexicon, close over
     script variants (and fill English from Japanese when needed)
  3) Cap each language at `detect_max_terms`

Fails closed: any strategy error, unparseable reply or empty guess yields the
fixed FALLBACK result. `detect` never raises.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Mapping, Optional, Union

from app.core.config import get_settings
from app.data.expander import CrossLanguageExpander, cross_language_expander
from app.data.term_normalizer import TermNormalizer, split_terms, term_normalizer
from app.detection.base import IngredientDetector
from app.schemas.recipes import DetectionProvenance, DetectionResult

logger = logging.getLogger(__name__)


class DetectorBackend(str, Enum):
    LOCAL = "local"
    EXTERNAL = "external"


FALLBACK_ENGLISH = ("tomato", "onion", "garlic")
FALLBACK_JAPANESE = ("トマト", "タマネギ", "ニンニク")
FALLBACK_CONFIDENCE = 0.5


class DetectorAdapter:
    def __init__(
        self,
        detectors: Mapping[DetectorBackend, IngredientDetector],
        *,
        normalizer: Optional[TermNormalizer] = None,
        expander: Optional[CrossLanguageExpander] = None,
        max_terms: Optional[int] = None,
    ):
        self.detectors = dict(detectors)
        self.normalizer = normalizer or term_normalizer
        self.expander = expander or cross_language_expander
        self.max_terms = max_terms if max_terms is not None else get_settings().detect_max_terms

    async def detect(
        self,
        image: bytes,
        backend: Union[DetectorBackend, str] = DetectorBackend.LOCAL,
        mime_type: str = "image/jpeg",
    ) -> DetectionResult:
        try:
            detector = self.detectors[DetectorBackend(backend)]
            raw = await detector.analyze(image, mime_type)
            result = self.finalize(raw.english, raw.japanese, raw.confidence, raw.provenance)
        except Exception as e:
            logger.warning("Detection via '%s' failed, using fallback: %s", backend, e)
            return self.fallback()

        if not result.english and not result.japanese:
            logger.info("Detection via '%s' found nothing, using fallback", backend)
            return self.fallback()
        return result

    def finalize(
        self,
        english: Iterable[str],
        japanese: Iterable[str],
        confidence: Optional[float],
        provenance: DetectionProvenance,
    ) -> DetectionResult:
        english_terms = self.normalizer.normalize_english(split_terms(list(english)))

        # Backend-provided Japanese first, then lexicon mappings of the English terms
        japanese_seed = split_terms(list(japanese)) + self.expander.expand_to_japanese(english_terms)
        japanese_terms = self.normalizer.close_japanese(japanese_seed)

        if not english_terms and japanese_terms:
            english_terms = self.expander.expand_to_english(japanese_terms)

        return DetectionResult(
            english=english_terms[: self.max_terms],
            japanese=japanese_terms[: self.max_terms],
            confidence=confidence,
            provenance=provenance,
        )

    def fallback(self) -> DetectionResult:
        return self.finalize(
            FALLBACK_ENGLISH,
            FALLBACK_JAPANESE,
            FALLBACK_CONFIDENCE,
            DetectionProvenance.FALLBACK,
        )

"""
Local heuristic "detector".

Stand-in for a real classifier: picks plausible ingredients from a fixed
taxonomy, driven by payload size and a random source. With no injected
random source the generator is seeded from the image hash, so the same
upload always gets the same guess.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import random
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from app.core.config import get_settings
from app.detection.base import IngredientDetector, RawDetection
from app.schemas.recipes import DetectionProvenance

logger = logging.getLogger(__name__)

FOOD_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "fruits": ("blueberry", "raspberry", "strawberry", "orange", "kiwi", "avocado",
               "apple", "banana", "mango", "papaya", "lemon", "lime"),
    "vegetables": ("spinach", "lettuce", "cucumber", "tomato", "onion", "garlic",
                   "carrot", "bell pepper", "mushroom", "cauliflower", "broccoli"),
    "nuts": ("pine nut", "pecan", "almond", "walnut", "cashew", "pistachio", "hazelnut"),
    "herbs": ("mint", "parsley", "cilantro", "basil", "oregano", "thyme", "rosemary", "sage"),
    "grains": ("rice", "bread", "cracker", "pasta", "noodle", "quinoa", "oats"),
    "proteins": ("chicken", "beef", "pork", "lamb", "fish", "shrimp", "egg", "milk",
                 "cheese", "tofu"),
    "legumes": ("bean", "lentil", "chickpea", "pea", "corn"),
})

LARGE_IMAGE_BYTES = 20000  # above this a nut is always drawn
BYTES_PER_EXTRA_DRAW = 10000
MAX_EXTRA_DRAWS = 3
MIN_TERMS = 3
MAX_TERMS = 6
LOCAL_CONFIDENCE = 0.87


def _draw(rng: random.Random, options: Sequence[str]) -> str:
    return options[rng.randrange(len(options))]


def select_ingredients(
    size: int,
    rng: random.Random,
    categories: Mapping[str, Sequence[str]] = FOOD_CATEGORIES,
) -> list[str]:
    """
    Pure selection step: 3 to 6 distinct terms from the taxonomy.

    One fruit and one vegetable always, a nut for large payloads, then up to
    `min(3, size // 10000)` extra draws from random categories.
    """
    names = list(categories)
    selected: list[str] = [
        _draw(rng, categories["fruits"]),
        _draw(rng, categories["vegetables"]),
    ]
    if size > LARGE_IMAGE_BYTES:
        selected.append(_draw(rng, categories["nuts"]))

    extra_draws = min(MAX_EXTRA_DRAWS, max(size, 0) // BYTES_PER_EXTRA_DRAW)
    for _ in range(extra_draws):
        ingredient = _draw(rng, categories[_draw(rng, names)])
        if ingredient not in selected:
            selected.append(ingredient)

    while len(selected) < MIN_TERMS:
        ingredient = _draw(rng, categories[_draw(rng, names)])
        if ingredient not in selected:
            selected.append(ingredient)

    return selected[:MAX_TERMS]


class LocalHeuristicDetector(IngredientDetector):
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        delay: Optional[float] = None,
        categories: Mapping[str, Sequence[str]] = FOOD_CATEGORIES,
    ):
        self.rng = rng
        self.delay = get_settings().local_analysis_delay if delay is None else delay
        self.categories = categories

    @staticmethod
    def seeded_rng(image: bytes) -> random.Random:
        seed = hashlib.sha256(image or b"").hexdigest()
        return random.Random(int(seed, 16))

    async def analyze(self, image: bytes, mime_type: str = "image/jpeg") -> RawDetection:
        # Simulated processing time
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        rng = self.rng if self.rng is not None else self.seeded_rng(image)
        ingredients = select_ingredients(len(image or b""), rng, self.categories)
        logger.debug("Local analysis of %d bytes -> %s", len(image or b""), ingredients)

        return RawDetection(
            english=tuple(ingredients),
            confidence=LOCAL_CONFIDENCE,
            provenance=DetectionProvenance.LOCAL_HEURISTIC,
        )

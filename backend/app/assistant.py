"""
Zairyo Assistant (Main Application)
===================================

Wires the ingredient pipeline together:
  1) TermNormalizer + CrossLanguageExpander: bilingual term sets
  2) DetectorAdapter: image -> ingredient guesses (local heuristic or vision)
  3) RecipeResolver: local catalog + optional external catalog

Tables and the catalog are built once per process; requests share them
read-only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from .core.config import get_settings
from .data.catalog import CatalogStore, InMemoryCatalogStore
from .data.expander import CrossLanguageExpander, cross_language_expander
from .data.loaders import reload_catalog, seed_catalog
from .data.term_normalizer import TermNormalizer, term_normalizer
from .detection.adapter import DetectorAdapter, DetectorBackend
from .detection.base import IngredientDetector
from .detection.heuristic import LocalHeuristicDetector
from .detection.vision import VisionDetector
from .schemas.recipes import DetectionResult, IngredientTermSet, Recipe, SearchResult
from .search.resolver import RecipeResolver
from .services.external_recipes import ExternalRecipeSource, MealDBClient
from .services.vision_client import VisionClient, get_vision_client

logger = logging.getLogger(__name__)


@dataclass
class AssistantConfig:
    enable_external: bool = False
    recipes_data_path: Optional[str] = None


class RecipeAssistant:
    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        *,
        catalog: Optional[CatalogStore] = None,
        external: Optional[ExternalRecipeSource] = None,
        vision_client: Optional[VisionClient] = None,
        local_detector: Optional[IngredientDetector] = None,
        normalizer: Optional[TermNormalizer] = None,
        expander: Optional[CrossLanguageExpander] = None,
    ):
        self.config = config or AssistantConfig(enable_external=get_settings().enable_external)

        self.normalizer = normalizer or term_normalizer
        self.expander = expander or cross_language_expander

        self.catalog = catalog if catalog is not None else InMemoryCatalogStore()
        self.external = external if external is not None else MealDBClient()
        self.resolver = RecipeResolver(self.catalog, self.external)

        self.detector = DetectorAdapter(
            {
                DetectorBackend.LOCAL: local_detector or LocalHeuristicDetector(),
                DetectorBackend.EXTERNAL: VisionDetector(vision_client or get_vision_client()),
            },
            normalizer=self.normalizer,
            expander=self.expander,
        )

        seeded = seed_catalog(self.catalog, self.config.recipes_data_path)
        logger.info(
            "RecipeAssistant initialized (catalog=%d, seeded=%d, external=%s)",
            self.catalog.count(),
            seeded,
            "ON" if self.config.enable_external else "OFF",
        )

    async def search_text(
        self, ingredients: Union[str, List[str], None]
    ) -> Tuple[IngredientTermSet, SearchResult]:
        term_set = self.normalizer.normalize(ingredients)
        result = await self.resolver.search(term_set, self.config.enable_external)
        return term_set, result

    async def get_recipe(self, recipe_id: Union[int, str]) -> Optional[Recipe]:
        return await self.resolver.get_recipe(recipe_id)

    async def detect(
        self,
        image: bytes,
        backend: Union[DetectorBackend, str] = DetectorBackend.LOCAL,
        mime_type: str = "image/jpeg",
    ) -> DetectionResult:
        return await self.detector.detect(image, backend, mime_type)

    def list_recipes(self) -> List[Recipe]:
        return self.catalog.list_all()

    def reload_catalog(self) -> int:
        count = reload_catalog(self.catalog, self.config.recipes_data_path)
        logger.info("Catalog reloaded with %d recipes", count)
        return count


@lru_cache(maxsize=1)
def get_assistant() -> RecipeAssistant:
    """Singleton assistant instance."""
    return RecipeAssistant()

"""
Recipe Resolver
===============

Cross-source recipe lookup:
  1) Local catalog: membership match on either language's ingredient field
  2) External catalog (optional): one lookup keyed on the first raw term
  3) Merge: local first, then external. No cross-source de-duplication,
     so the same dish can appear once per source.

Upstream failures degrade to empty results for that source; they never fail
the whole search.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from app.core.config import get_settings
from app.data.catalog import CatalogStore
from app.schemas.recipes import IngredientTermSet, Recipe, RecipeSource, SearchResult
from app.services.external_recipes import ExternalMeal, ExternalRecipeSource

logger = logging.getLogger(__name__)

EXTERNAL_ID_PREFIX = "ext_"
EXTERNAL_CUISINE = "International"
EXTERNAL_INSTRUCTIONS = ["Recipe instructions available on TheMealDB website"]
EXTERNAL_INSTRUCTIONS_JP = ["レシピの手順はTheMealDBウェブサイトでご確認ください"]
EXTERNAL_UNTITLED = "Untitled"


def external_title(meal: ExternalMeal) -> str:
    """Meal name, else its id. The external API may omit `strMeal`."""
    return meal.name.strip() or meal.id or EXTERNAL_UNTITLED


def meal_to_search_recipe(meal: ExternalMeal, term: str) -> Recipe:
    """Summary recipe for a search hit. The filter endpoint returns no details."""
    return Recipe(
        id=f"{EXTERNAL_ID_PREFIX}{meal.id}",
        title=external_title(meal),
        title_localized=external_title(meal),
        cuisine=EXTERNAL_CUISINE,
        image=meal.thumbnail,
        ingredients=[term.lower()],
        ingredients_localized=[term],
        instructions=list(EXTERNAL_INSTRUCTIONS),
        instructions_localized=list(EXTERNAL_INSTRUCTIONS_JP),
        prep_time="Unknown",
        cook_time="Unknown",
        difficulty="Unknown",
        provenance=RecipeSource.EXTERNAL,
    )


def split_instructions(text: str) -> List[str]:
    """One step per line, blank lines dropped."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def meal_to_detail_recipe(meal: ExternalMeal) -> Recipe:
    return Recipe(
        id=meal.id,
        title=external_title(meal),
        title_localized=external_title(meal),
        cuisine=EXTERNAL_CUISINE,
        image=meal.thumbnail,
        ingredients=list(meal.ingredients),
        instructions=split_instructions(meal.instructions),
        prep_time="N/A",
        cook_time="N/A",
        difficulty="N/A",
        provenance=RecipeSource.EXTERNAL,
    )


class RecipeResolver:
    def __init__(
        self,
        catalog: CatalogStore,
        external: Optional[ExternalRecipeSource] = None,
        *,
        external_max_results: Optional[int] = None,
    ):
        self.catalog = catalog
        self.external = external
        self.external_max_results = (
            external_max_results
            if external_max_results is not None
            else get_settings().external_max_results
        )

    async def search(self, term_set: IngredientTermSet, external_enabled: bool) -> SearchResult:
        local = self._search_local(term_set)

        external: List[Recipe] = []
        if external_enabled and term_set.raw_terms:
            external = await self._search_external(term_set.raw_terms[0])

        logger.info(
            "Search en=%s jp=%s -> %d local, %d external",
            term_set.english,
            term_set.japanese,
            len(local),
            len(external),
        )
        return SearchResult(
            recipes=local + external,
            local_count=len(local),
            external_count=len(external),
        )

    def _search_local(self, term_set: IngredientTermSet) -> List[Recipe]:
        try:
            return self.catalog.find_by_ingredient_membership(term_set.english, term_set.japanese)
        except Exception as e:
            logger.error("Local catalog query failed: %s", e, exc_info=True)
            return []

    async def _search_external(self, term: str) -> List[Recipe]:
        if self.external is None:
            return []
        try:
            meals = await self.external.filter_by_ingredient(term)
        except Exception as e:
            logger.error("External API error: %s", e)
            return []

        recipes: List[Recipe] = []
        for meal in meals[: self.external_max_results]:
            try:
                recipes.append(meal_to_search_recipe(meal, term))
            except Exception as e:
                logger.warning("Skipping external meal %s: %s", meal.id, e)
        return recipes

    async def get_recipe(self, recipe_id: Union[int, str]) -> Optional[Recipe]:
        """Local catalog by numeric id first; external source only on a miss."""
        key = str(recipe_id).strip()

        if key.isdigit():
            try:
                recipe = self.catalog.find_by_id(int(key))
            except Exception as e:
                logger.error("Local catalog lookup failed for %s: %s", key, e)
                recipe = None
            if recipe is not None:
                return recipe

        return await self._lookup_external(key)

    async def _lookup_external(self, key: str) -> Optional[Recipe]:
        if self.external is None:
            return None

        meal_id = key[len(EXTERNAL_ID_PREFIX):] if key.startswith(EXTERNAL_ID_PREFIX) else key
        if not meal_id:
            return None
        try:
            meal = await self.external.lookup_by_id(meal_id)
            if meal is None:
                return None
            return meal_to_detail_recipe(meal)
        except Exception as e:
            logger.error("External API error: %s", e)
            return None

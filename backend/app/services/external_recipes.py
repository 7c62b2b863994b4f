"""
External recipe source (TheMealDB).

Read-only remote catalog queried per request. Results are never persisted.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, Field

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# TheMealDB exposes ingredients as strIngredient1 .. strIngredient20
MAX_INGREDIENT_SLOTS = 20


class ExternalSourceError(Exception):
    """The external recipe API is unreachable or returned garbage."""


class ExternalMeal(BaseModel):
    id: str
    name: str
    thumbnail: Optional[str] = None
    instructions: str = ""
    ingredients: List[str] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, meal: dict[str, Any]) -> "ExternalMeal":
        ingredients: list[str] = []
        for i in range(1, MAX_INGREDIENT_SLOTS + 1):
            value = meal.get(f"strIngredient{i}")
            if isinstance(value, str) and value.strip():
                ingredients.append(value.strip())

        return cls(
            id=str(meal.get("idMeal") or ""),
            name=meal.get("strMeal") or "",
            thumbnail=meal.get("strMealThumb"),
            instructions=meal.get("strInstructions") or "",
            ingredients=ingredients,
        )


class ExternalRecipeSource(ABC):
    """Abstract external catalog."""

    @abstractmethod
    async def filter_by_ingredient(self, term: str) -> List[ExternalMeal]:
        raise NotImplementedError

    @abstractmethod
    async def lookup_by_id(self, meal_id: str) -> Optional[ExternalMeal]:
        raise NotImplementedError


class MealDBClient(ExternalRecipeSource):
    """TheMealDB v1 JSON API over httpx."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.external_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.external_timeout

    async def _get_meals(self, endpoint: str, params: dict[str, str]) -> list[dict[str, Any]]:
        url = f"{self.base_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalSourceError(f"{endpoint} failed: {e}") from e

        # {"meals": null} when nothing matches
        meals = data.get("meals") if isinstance(data, dict) else None
        if not isinstance(meals, list):
            return []
        return [m for m in meals if isinstance(m, dict)]

    async def filter_by_ingredient(self, term: str) -> List[ExternalMeal]:
        meals = await self._get_meals("filter.php", {"i": term})
        logger.info("External source returned %d meals for '%s'", len(meals), term)
        return [ExternalMeal.from_payload(m) for m in meals]

    async def lookup_by_id(self, meal_id: str) -> Optional[ExternalMeal]:
        meals = await self._get_meals("lookup.php", {"i": meal_id})
        if not meals:
            return None
        return ExternalMeal.from_payload(meals[0])

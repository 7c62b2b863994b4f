"""
Local recipe catalog.

The resolver only needs a keyed document collection that answers
membership queries, so the store is an ABC with an in-memory default.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import Lock
from typing import Iterable, List, Optional, Union

from app.schemas.recipes import Recipe

logger = logging.getLogger(__name__)


class CatalogStore(ABC):
    """Abstract recipe store."""

    @abstractmethod
    def find_by_ingredient_membership(
        self, english: Iterable[str], japanese: Iterable[str]
    ) -> List[Recipe]:
        """Recipes with any English ingredient in `english` OR any Japanese one in `japanese`."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, recipe_id: Union[int, str]) -> Optional[Recipe]:
        raise NotImplementedError

    @abstractmethod
    def insert_all(self, recipes: Iterable[Recipe]) -> int:
        raise NotImplementedError

    @abstractmethod
    def delete_all(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def replace_all(self, recipes: Iterable[Recipe]) -> int:
        """Swap the whole contents in one step. Readers never see an empty store."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Recipe]:
        raise NotImplementedError


class InMemoryCatalogStore(CatalogStore):
    """
    List-backed store. Insertion order is the catalog order.

    Writes swap the list under a lock; reads take a snapshot reference.
    """

    def __init__(self, recipes: Optional[Iterable[Recipe]] = None):
        self._recipes: List[Recipe] = list(recipes or [])
        self._lock = Lock()

    def find_by_ingredient_membership(
        self, english: Iterable[str], japanese: Iterable[str]
    ) -> List[Recipe]:
        english_set = set(english or [])
        japanese_set = set(japanese or [])
        if not english_set and not japanese_set:
            return []

        return [
            recipe
            for recipe in self._recipes
            if english_set.intersection(recipe.ingredients)
            or japanese_set.intersection(recipe.ingredients_localized)
        ]

    def find_by_id(self, recipe_id: Union[int, str]) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def insert_all(self, recipes: Iterable[Recipe]) -> int:
        new_recipes = list(recipes)
        with self._lock:
            self._recipes = self._recipes + new_recipes
        logger.debug("Inserted %d recipes into catalog", len(new_recipes))
        return len(new_recipes)

    def delete_all(self) -> int:
        with self._lock:
            removed = len(self._recipes)
            self._recipes = []
        return removed

    def replace_all(self, recipes: Iterable[Recipe]) -> int:
        new_recipes = list(recipes)
        with self._lock:
            self._recipes = new_recipes
        logger.debug("Replaced catalog with %d recipes", len(new_recipes))
        return len(new_recipes)

    def count(self) -> int:
        return len(self._recipes)

    def list_all(self) -> List[Recipe]:
        return list(self._recipes)

"""
Zairyo Schemas
==============

Pydantic schemas for structured data.

- recipes: Recipe, IngredientTermSet, DetectionResult, SearchResult
- responses: SearchResponse, DetectResponse, etc.
"""

from .recipes import (
    DetectionProvenance,
    DetectionResult,
    IngredientTermSet,
    Recipe,
    RecipeSource,
    SearchResult,
    SourceLabel,
)
from .responses import (
    DetectIngredientsResponse,
    DetectResponse,
    ReloadResponse,
    SearchResponse,
    TranslateRequest,
    TranslateResponse,
)

__all__ = [
    "DetectionProvenance",
    "DetectionResult",
    "IngredientTermSet",
    "Recipe",
    "RecipeSource",
    "SearchResult",
    "SourceLabel",
    "DetectIngredientsResponse",
    "DetectResponse",
    "ReloadResponse",
    "SearchResponse",
    "TranslateRequest",
    "TranslateResponse",
]

"""
Recipe & Term Schemas
=====================

Domain models shared by the normalizer, the detector adapter and the
resolver.

- Recipe: one catalog entry (local or synthesized from the external source)
- IngredientTermSet: normalized bilingual terms for one request
- DetectionResult: uniform output of every ingredient detector
- SearchResult: merged local + external recipes
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RecipeSource(str, Enum):
    LOCAL = "local"
    EXTERNAL = "external"


class SourceLabel(str, Enum):
    LOCAL = "local"
    EXTERNAL = "external"
    MIXED = "mixed"


class DetectionProvenance(str, Enum):
    LOCAL_HEURISTIC = "local_heuristic"
    EXTERNAL_VISION = "external_vision"
    FALLBACK = "fallback"


class Recipe(BaseModel):
    """
    Recipe document.

    Field aliases are the wire names used by the seed data and the frontend
    (`title_jp`, `prepTime`, ...). Both names are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    title: str = Field(min_length=1)
    title_localized: str = Field(default="", alias="title_jp")
    cuisine: str = ""
    image: Optional[str] = None

    # English and Japanese ingredient names, index-aligned where available
    ingredients: List[str] = Field(default_factory=list)
    ingredients_localized: List[str] = Field(default_factory=list, alias="ingredients_jp")

    instructions: List[str] = Field(default_factory=list)
    instructions_localized: List[str] = Field(default_factory=list, alias="instructions_jp")

    prep_time: str = Field(default="", alias="prepTime")
    cook_time: str = Field(default="", alias="cookTime")
    difficulty: str = ""

    provenance: RecipeSource = Field(default=RecipeSource.LOCAL, alias="source")


class IngredientTermSet(BaseModel):
    """
    Normalized, deduplicated per-language ingredient terms.

    `japanese` is always closed over the synonym table: a term with a known
    script variant is accompanied by that variant.
    """

    model_config = ConfigDict(frozen=True)

    english: List[str] = Field(default_factory=list)
    japanese: List[str] = Field(default_factory=list)
    raw_terms: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.english and not self.japanese


class DetectionResult(BaseModel):
    """Output of the detector adapter. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    english: List[str] = Field(default_factory=list)
    japanese: List[str] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    provenance: DetectionProvenance


class SearchResult(BaseModel):
    """Local recipes first, external ones after, each group in query order."""

    recipes: List[Recipe] = Field(default_factory=list)
    local_count: int = Field(ge=0, default=0)
    external_count: int = Field(ge=0, default=0)

    @property
    def source_label(self) -> SourceLabel:
        if self.external_count > 0:
            return SourceLabel.MIXED
        return SourceLabel.LOCAL

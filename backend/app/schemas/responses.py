"""
Response Schemas
================

Outward response shapes consumed by the frontend.
Field aliases keep the camelCase names the UI already reads.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .recipes import DetectionResult, Recipe, SearchResult


class SearchResponse(BaseModel):
    """Merged search response: `{recipes, source, count, localCount, externalCount}`."""

    model_config = ConfigDict(populate_by_name=True)

    recipes: List[Recipe] = Field(default_factory=list)
    source: str
    count: int = Field(ge=0, default=0)
    local_count: int = Field(ge=0, default=0, alias="localCount")
    external_count: int = Field(ge=0, default=0, alias="externalCount")

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResponse":
        return cls(
            recipes=result.recipes,
            source=result.source_label.value,
            count=len(result.recipes),
            local_count=result.local_count,
            external_count=result.external_count,
        )


class DetectResponse(BaseModel):
    """Detection response: `{ingredients_en, ingredients_jp, confidence, source}`."""

    ingredients_en: List[str] = Field(default_factory=list)
    ingredients_jp: List[str] = Field(default_factory=list)
    confidence: Optional[float] = None
    source: str

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectResponse":
        return cls(
            ingredients_en=result.english,
            ingredients_jp=result.japanese,
            confidence=result.confidence,
            source=result.provenance.value,
        )


class DetectIngredientsResponse(DetectResponse):
    """
    Response of the upload-and-guess endpoint.

    Adds the flat `ingredients` list and the top labels shown as chips.
    """

    model_config = ConfigDict(populate_by_name=True)

    ingredients: List[str] = Field(default_factory=list)
    detected_labels: List[str] = Field(default_factory=list, alias="detectedLabels")

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectIngredientsResponse":
        return cls(
            ingredients_en=result.english,
            ingredients_jp=result.japanese,
            confidence=result.confidence,
            source=result.provenance.value,
            ingredients=result.english,
            detected_labels=result.english[:3],
        )


class TranslateRequest(BaseModel):
    text: Optional[str] = None


class TranslateResponse(BaseModel):
    translation: str


class ReloadResponse(BaseModel):
    message: str
    count: int

"""
Shared fixtures and fakes.

No test touches the network: the external recipe source and the vision
backend are replaced by in-memory fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from app.assistant import AssistantConfig, RecipeAssistant
from app.data.catalog import InMemoryCatalogStore
from app.data.loaders import load_recipes_file
from app.detection.heuristic import LocalHeuristicDetector
from app.search.trace_logger import TraceLogger, set_trace_logger
from app.services.external_recipes import ExternalMeal, ExternalRecipeSource, ExternalSourceError
from app.services.vision_client import VisionClient


class FakeExternalSource(ExternalRecipeSource):
    def __init__(
        self,
        meals: Optional[List[ExternalMeal]] = None,
        lookup: Optional[Dict[str, ExternalMeal]] = None,
        fail: bool = False,
    ):
        self.meals = meals or []
        self.lookup = lookup or {}
        self.fail = fail
        self.filter_calls: List[str] = []
        self.lookup_calls: List[str] = []

    async def filter_by_ingredient(self, term: str) -> List[ExternalMeal]:
        self.filter_calls.append(term)
        if self.fail:
            raise ExternalSourceError("external source down")
        return list(self.meals)

    async def lookup_by_id(self, meal_id: str) -> Optional[ExternalMeal]:
        self.lookup_calls.append(meal_id)
        if self.fail:
            raise ExternalSourceError("external source down")
        return self.lookup.get(meal_id)


class FakeVisionClient(VisionClient):
    name = "fake"

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[tuple[int, str]] = []

    async def classify(self, image: bytes, mime_type: str = "image/jpeg") -> str:
        self.calls.append((len(image), mime_type))
        if self.error is not None:
            raise self.error
        return self.reply


def make_meal(meal_id: str, name: str, **extra) -> ExternalMeal:
    return ExternalMeal.from_payload({
        "idMeal": meal_id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/{meal_id}.jpg",
        **extra,
    })


@pytest.fixture(autouse=True)
def trace_log_path(tmp_path: Path) -> Path:
    """Keep request traces out of the repository during tests."""
    path = tmp_path / "traces.jsonl"
    set_trace_logger(TraceLogger(log_path=path))
    yield path
    set_trace_logger(None)


@pytest.fixture
def catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(load_recipes_file())


@pytest.fixture
def external() -> FakeExternalSource:
    return FakeExternalSource()


@pytest.fixture
def vision() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def make_assistant(catalog, external, vision):
    def _make(enable_external: bool = False, **overrides) -> RecipeAssistant:
        kwargs = {
            "catalog": catalog,
            "external": external,
            "vision_client": vision,
            "local_detector": LocalHeuristicDetector(delay=0),
        }
        kwargs.update(overrides)
        return RecipeAssistant(AssistantConfig(enable_external=enable_external), **kwargs)

    return _make

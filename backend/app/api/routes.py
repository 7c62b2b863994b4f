"""
Zairyo API Routes
=================

Endpoints:
  - GET  /health
  - GET  /recipes
  - GET  /recipes/reload
  - GET  /recipes/search?ingredients=...
  - GET  /recipes/{recipe_id}
  - POST /translate
  - POST /detect-ingredients   (local heuristic)
  - POST /detect               (remote vision by default)
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from ..assistant import RecipeAssistant, get_assistant
from ..data.loaders import CatalogLoadError
from ..detection.adapter import DetectorBackend
from ..schemas.recipes import DetectionResult, Recipe
from ..schemas.responses import (
    DetectIngredientsResponse,
    DetectResponse,
    ReloadResponse,
    SearchResponse,
    TranslateRequest,
    TranslateResponse,
)
from ..search.trace_logger import get_trace_logger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])


def _request_id() -> str:
    return str(uuid.uuid4())[:8]


@router.get("/health")
async def health(assistant: RecipeAssistant = Depends(get_assistant)):
    """Health check endpoint."""
    return {
        "status": "OK",
        "message": "Server is running",
        "recipes": assistant.catalog.count(),
    }


@router.get("/recipes", response_model=List[Recipe])
async def list_recipes(assistant: RecipeAssistant = Depends(get_assistant)):
    return assistant.list_recipes()


@router.get("/recipes/reload", response_model=ReloadResponse)
async def reload_recipes(assistant: RecipeAssistant = Depends(get_assistant)):
    """Clear the catalog and reload it from the seed file."""
    try:
        count = assistant.reload_catalog()
    except CatalogLoadError as e:
        logger.error("Failed to reload recipes: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reload recipes",
        )
    return ReloadResponse(message=f"Successfully reloaded {count} recipes", count=count)


@router.get("/recipes/search", response_model=SearchResponse)
async def search_recipes(
    ingredients: Optional[str] = Query(
        default=None, description="Comma-separated ingredients (',' or '、')"
    ),
    assistant: RecipeAssistant = Depends(get_assistant),
):
    request_id = _request_id()
    if not ingredients or not ingredients.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ingredients parameter is required",
        )

    try:
        term_set, result = await assistant.search_text(ingredients)
    except Exception as e:
        logger.error("[%s] search error: %s", request_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search recipes",
        )

    get_trace_logger().log_search(
        request_id=request_id,
        query=ingredients,
        term_set=term_set,
        result=result,
        external_enabled=assistant.config.enable_external,
    )
    return SearchResponse.from_result(result)


@router.get("/recipes/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, assistant: RecipeAssistant = Depends(get_assistant)):
    recipe = await assistant.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest):
    """Identity translation; localized fields already ship with each recipe."""
    if request.text is None or not str(request.text).strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    return TranslateResponse(translation=str(request.text))


async def _run_detection(
    image: Optional[UploadFile],
    backend: DetectorBackend,
    assistant: RecipeAssistant,
) -> DetectionResult:
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image file provided")

    request_id = _request_id()
    content = await image.read()
    detection = await assistant.detect(content, backend, image.content_type or "image/jpeg")

    get_trace_logger().log_detection(
        request_id=request_id,
        backend=backend.value,
        image_bytes=len(content),
        result=detection,
    )
    return detection


@router.post("/detect-ingredients", response_model=DetectIngredientsResponse)
async def detect_ingredients(
    image: Optional[UploadFile] = File(default=None),
    assistant: RecipeAssistant = Depends(get_assistant),
):
    detection = await _run_detection(image, DetectorBackend.LOCAL, assistant)
    return DetectIngredientsResponse.from_result(detection)


@router.post("/detect", response_model=DetectResponse)
async def detect(
    image: Optional[UploadFile] = File(default=None),
    backend: DetectorBackend = Query(default=DetectorBackend.EXTERNAL),
    assistant: RecipeAssistant = Depends(get_assistant),
):
    detection = await _run_detection(image, backend, assistant)
    return DetectResponse.from_result(detection)

"""
Data loaders for the local recipe catalog.
Loads the seed JSON dataset and (re)fills a CatalogStore from it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from app.core.config import get_settings
from app.data.catalog import CatalogStore
from app.schemas.recipes import Recipe, RecipeSource

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


class CatalogLoadError(Exception):
    """Seed file missing, unreadable or not a list of recipes."""


# Used when the seed file cannot be loaded at startup
FALLBACK_RECIPES: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "Butter Chicken",
        "title_jp": "バターチキン",
        "cuisine": "Indian",
        "image": "https://images.unsplash.com/photo-1565557623262-b51c2513a641?w=500",
        "ingredients": ["chicken", "butter", "tomato", "cream", "spices"],
        "ingredients_jp": ["鶏肉", "バター", "トマト", "クリーム", "スパイス"],
        "instructions": [
            "Marinate chicken with yogurt and spices",
            "Cook chicken until golden brown",
            "Prepare tomato-based gravy",
            "Combine chicken with gravy and cream",
            "Simmer until sauce thickens",
        ],
        "instructions_jp": [
            "鶏肉をヨーグルトとスパイスでマリネする",
            "鶏肉を黄金色になるまで調理する",
            "トマトベースのグレービーを準備する",
            "鶏肉とグレービーとクリームを組み合わせる",
            "ソースが濃くなるまで煮込む",
        ],
        "prepTime": "20 mins",
        "cookTime": "30 mins",
        "difficulty": "Medium",
    }
]


def default_recipes_path() -> Path:
    return BACKEND_DIR / get_settings().recipes_data_path


def _safe_str_list(value: Any) -> list[str]:
    """Keep only non-blank strings, trimmed."""
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def parse_recipes(raw: Any) -> list[Recipe]:
    """Validate raw JSON entries into local recipes. Invalid entries are skipped."""
    if not isinstance(raw, list):
        raise CatalogLoadError("Recipe data must be a JSON list")

    recipes: list[Recipe] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.warning("Skipping recipe #%d: not an object", index)
            continue
        data = dict(entry)
        for key in ("ingredients", "ingredients_jp", "instructions", "instructions_jp"):
            data[key] = _safe_str_list(data.get(key))
        data["source"] = RecipeSource.LOCAL
        try:
            recipes.append(Recipe(**data))
        except ValidationError as e:
            logger.warning("Skipping recipe #%d (%s): %s", index, entry.get("title"), e)
    return recipes


def load_recipes_file(path: Union[str, Path, None] = None) -> list[Recipe]:
    p = Path(path) if path else default_recipes_path()
    if not p.exists():
        raise CatalogLoadError(f"Recipe data file not found: {p}")
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Failed to read recipe data {p}: {e}") from e

    recipes = parse_recipes(raw)
    logger.info("Loaded %d recipes from %s", len(recipes), p)
    return recipes


def seed_catalog(store: CatalogStore, path: Union[str, Path, None] = None) -> int:
    """
    Fill an empty store from the seed file.

    A non-empty store is left untouched. When the file cannot be loaded the
    built-in fallback recipes are inserted instead.
    """
    if store.count() > 0:
        return 0

    try:
        recipes = load_recipes_file(path)
    except CatalogLoadError as e:
        logger.error("Failed to load recipes from file: %s", e)
        recipes = parse_recipes(FALLBACK_RECIPES)
        logger.info("Fallback recipes initialized")

    return store.insert_all(recipes)


def reload_catalog(store: CatalogStore, path: Union[str, Path, None] = None) -> int:
    """Replace the store contents with a fresh load. Raises CatalogLoadError."""
    recipes = load_recipes_file(path)
    return store.replace_all(recipes)

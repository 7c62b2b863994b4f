"""
Validate the seed dataset and the catalog (re)load paths.
"""

import json

import pytest

from app.data.catalog import InMemoryCatalogStore
from app.data.loaders import (
    CatalogLoadError,
    load_recipes_file,
    parse_recipes,
    reload_catalog,
    seed_catalog,
)
from app.schemas.recipes import RecipeSource


def test_seed_file_loads_all_recipes():
    recipes = load_recipes_file()

    assert [r.id for r in recipes] == list(range(1, 9))
    for recipe in recipes:
        assert recipe.title
        assert recipe.provenance == RecipeSource.LOCAL
        assert recipe.ingredients and recipe.ingredients_localized
        assert all(term == term.lower() for term in recipe.ingredients)


def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogLoadError):
        load_recipes_file(tmp_path / "nope.json")


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogLoadError):
        load_recipes_file(path)


def test_non_list_payload_raises():
    with pytest.raises(CatalogLoadError):
        parse_recipes({"recipes": []})


def test_invalid_entries_are_skipped():
    recipes = parse_recipes([
        {"id": 1, "title": "Good", "ingredients": ["rice", "", 3, " salt "], "source": "external"},
        {"id": 2, "title": ""},
        {"title": "No id"},
        "not an object",
    ])

    assert len(recipes) == 1
    assert recipes[0].ingredients == ["rice", "salt"]
    assert recipes[0].provenance == RecipeSource.LOCAL


def test_seed_uses_fallback_when_file_missing(tmp_path):
    store = InMemoryCatalogStore()

    inserted = seed_catalog(store, tmp_path / "missing.json")

    assert inserted == 1
    assert store.find_by_id(1).title == "Butter Chicken"


def test_seed_leaves_populated_store_untouched(catalog):
    assert seed_catalog(catalog) == 0
    assert catalog.count() == 8


def test_reload_replaces_contents(tmp_path, catalog):
    path = tmp_path / "recipes.json"
    path.write_text(
        json.dumps([{"id": 10, "title": "Jeera Rice", "ingredients": ["rice", "cumin"]}]),
        encoding="utf-8",
    )

    assert reload_catalog(catalog, path) == 1
    assert [r.title for r in catalog.list_all()] == ["Jeera Rice"]


def test_reload_failure_keeps_existing_contents(tmp_path, catalog):
    with pytest.raises(CatalogLoadError):
        reload_catalog(catalog, tmp_path / "missing.json")
    assert catalog.count() == 8


def test_membership_query_with_no_terms_is_empty(catalog):
    assert catalog.find_by_ingredient_membership([], []) == []


def test_membership_query_matches_exact_terms_only(catalog):
    assert catalog.find_by_ingredient_membership(["lentil"], []) == []
    assert [r.id for r in catalog.find_by_ingredient_membership(["lentils"], [])] == [3]


class NoClearCatalog(InMemoryCatalogStore):
    def delete_all(self) -> int:
        raise AssertionError("reload must not clear the store before refilling it")


def test_reload_swaps_contents_in_one_step(tmp_path):
    store = NoClearCatalog(load_recipes_file())
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps([{"id": 10, "title": "Jeera Rice"}]), encoding="utf-8")
    snapshot = store.list_all()

    assert reload_catalog(store, path) == 1
    assert [r.id for r in store.list_all()] == [10]
    assert len(snapshot) == 8


def test_replace_all(catalog):
    assert catalog.replace_all(catalog.list_all()[:2]) == 2
    assert [r.id for r in catalog.list_all()] == [1, 2]

"""
API Integration Tests
=====================

Runs against the FastAPI app object without requiring a running server.

Important:
- The assistant dependency is overridden with one wired to in-memory fakes,
  so no request reaches TheMealDB or a vision provider.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.assistant import get_assistant
from conftest import make_meal


@pytest.fixture
def assistant(make_assistant):
    return make_assistant()


@pytest.fixture
def client(assistant):
    from main import app

    app.dependency_overrides[get_assistant] = lambda: assistant
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK", "message": "Server is running", "recipes": 8}


def test_list_recipes_uses_wire_names(client: TestClient):
    r = client.get("/api/recipes")
    assert r.status_code == 200
    recipes = r.json()
    assert len(recipes) == 8
    assert recipes[0]["title_jp"] == "バターチキン"
    assert recipes[0]["prepTime"] == "20 mins"
    assert recipes[0]["source"] == "local"


# ============================================================================
# SEARCH
# ============================================================================

def test_search_local(client: TestClient):
    r = client.get("/api/recipes/search", params={"ingredients": "okra"})
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "local"
    assert data["count"] == 1
    assert data["localCount"] == 1
    assert data["externalCount"] == 0
    assert data["recipes"][0]["title"] == "Bhindi Masala"


def test_search_japanese_with_full_width_comma(client: TestClient):
    r = client.get("/api/recipes/search", params={"ingredients": "蕃茄、米"})
    assert r.status_code == 200
    assert [recipe["id"] for recipe in r.json()["recipes"]] == [1, 2, 3, 5, 6, 7]


def test_search_mixed(make_assistant, external):
    from main import app

    external.meals = [make_meal("52795", "Chicken Handi"), make_meal("52796", "Chicken Alfredo")]
    assistant = make_assistant(enable_external=True)
    app.dependency_overrides[get_assistant] = lambda: assistant
    try:
        r = TestClient(app).get("/api/recipes/search", params={"ingredients": "Chicken"})
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "mixed"
    assert data["localCount"] == 2
    assert data["externalCount"] == 2
    assert data["count"] == 4
    assert data["recipes"][2]["id"] == "ext_52795"
    assert data["recipes"][2]["source"] == "external"
    assert external.filter_calls == ["Chicken"]


@pytest.mark.parametrize("params", [{}, {"ingredients": ""}, {"ingredients": "   "}])
def test_search_requires_ingredients(client: TestClient, params):
    r = client.get("/api/recipes/search", params=params)
    assert r.status_code == 400
    assert r.json()["detail"] == "Ingredients parameter is required"


def test_search_internal_error(client: TestClient, assistant, monkeypatch):
    async def broken(_ingredients):
        raise RuntimeError("boom")

    monkeypatch.setattr(assistant, "search_text", broken)

    r = client.get("/api/recipes/search", params={"ingredients": "okra"})
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to search recipes"


# ============================================================================
# RECIPE BY ID / RELOAD
# ============================================================================

def test_get_local_recipe(client: TestClient):
    r = client.get("/api/recipes/4")
    assert r.status_code == 200
    assert r.json()["title"] == "Palak Paneer"


def test_get_external_recipe(client: TestClient, external):
    external.lookup["52795"] = make_meal("52795", "Chicken Handi", strInstructions="Fry.\nServe.")

    r = client.get("/api/recipes/ext_52795")
    assert r.status_code == 200
    data = r.json()
    assert data["instructions"] == ["Fry.", "Serve."]
    assert data["cookTime"] == "N/A"


def test_get_unknown_recipe(client: TestClient):
    r = client.get("/api/recipes/999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Recipe not found"


def test_reload(client: TestClient, assistant):
    assistant.catalog.delete_all()

    r = client.get("/api/recipes/reload")
    assert r.status_code == 200
    assert r.json() == {"message": "Successfully reloaded 8 recipes", "count": 8}
    assert assistant.catalog.count() == 8


def test_reload_failure_keeps_catalog(client: TestClient, assistant, tmp_path):
    assistant.config.recipes_data_path = str(tmp_path / "missing.json")

    r = client.get("/api/recipes/reload")
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to reload recipes"
    assert assistant.catalog.count() == 8


# ============================================================================
# TRANSLATE
# ============================================================================

def test_translate_is_identity(client: TestClient):
    r = client.post("/api/translate", json={"text": "トマト"})
    assert r.status_code == 200
    assert r.json() == {"translation": "トマト"}


@pytest.mark.parametrize("payload", [{}, {"text": ""}])
def test_translate_requires_text(client: TestClient, payload):
    r = client.post("/api/translate", json=payload)
    assert r.status_code == 400
    assert r.json()["detail"] == "Text is required"


# ============================================================================
# DETECTION
# ============================================================================

def test_detect_ingredients_local(client: TestClient):
    r = client.post(
        "/api/detect-ingredients",
        files={"image": ("photo.jpg", b"\xff\xd8" + b"0" * 25000, "image/jpeg")},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "local_heuristic"
    assert data["confidence"] == 0.87
    assert data["ingredients"] == data["ingredients_en"]
    assert data["detectedLabels"] == data["ingredients_en"][:3]
    assert 3 <= len(data["ingredients_en"]) <= 6


def test_detect_external(client: TestClient, vision):
    vision.reply = '```json\n{"ingredients_en": ["okra"], "ingredients_jp": ["オクラ"], "confidence": 0.8}\n```'

    r = client.post("/api/detect", files={"image": ("okra.png", b"png-bytes", "image/png")})
    assert r.status_code == 200
    assert r.json() == {
        "ingredients_en": ["okra"],
        "ingredients_jp": ["オクラ", "秋葵"],
        "confidence": 0.8,
        "source": "external_vision",
    }
    assert vision.calls == [(9, "image/png")]


def test_detect_external_failure_falls_back(client: TestClient, vision):
    vision.error = RuntimeError("no API key")

    r = client.post("/api/detect", files={"image": ("x.jpg", b"x", "image/jpeg")})
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "fallback"
    assert data["confidence"] == 0.5
    assert data["ingredients_en"] == ["tomato", "onion", "garlic"]


def test_detect_with_local_backend_query(client: TestClient, vision):
    r = client.post(
        "/api/detect",
        params={"backend": "local"},
        files={"image": ("x.jpg", b"abc", "image/jpeg")},
    )
    assert r.status_code == 200
    assert r.json()["source"] == "local_heuristic"
    assert vision.calls == []


@pytest.mark.parametrize("path", ["/api/detect", "/api/detect-ingredients"])
def test_detect_requires_image(client: TestClient, path):
    r = client.post(path)
    assert r.status_code == 400
    assert r.json()["detail"] == "No image file provided"

"""
Tests for persistent trace logging.
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from main import app
from app.assistant import get_assistant


@pytest.fixture
def api_client(make_assistant):
    assistant = make_assistant()
    app.dependency_overrides[get_assistant] = lambda: assistant
    yield TestClient(app)
    app.dependency_overrides.clear()


def read_entries(path: Path) -> list[dict]:
    assert path.exists(), "Expected trace log file to be created"
    return [json.loads(line) for line in path.read_text(encoding="utf-8").strip().splitlines()]


def test_search_request_is_logged(trace_log_path: Path, api_client: TestClient):
    """Each search call should append a JSON line trace."""
    response = api_client.get("/api/recipes/search", params={"ingredients": "トマト, okra"})
    assert response.status_code == 200

    entry = read_entries(trace_log_path)[-1]
    assert entry["kind"] == "search"
    assert entry["query"] == "トマト, okra"
    assert entry["terms_en"] == ["okra"]
    assert entry["terms_jp"] == ["トマト", "蕃茄"]
    assert entry["source"] == "local"
    assert entry["local_count"] == response.json()["localCount"]
    assert entry["external_enabled"] is False
    assert len(entry["request_id"]) == 8


def test_detection_request_is_logged(trace_log_path: Path, api_client: TestClient):
    response = api_client.post(
        "/api/detect-ingredients",
        files={"image": ("photo.jpg", b"0" * 1234, "image/jpeg")},
    )
    assert response.status_code == 200

    entry = read_entries(trace_log_path)[-1]
    assert entry["kind"] == "detect"
    assert entry["backend"] == "local"
    assert entry["image_bytes"] == 1234
    assert entry["provenance"] == "local_heuristic"
    assert entry["terms_en"] == response.json()["ingredients_en"]


def test_rejected_search_is_not_logged(trace_log_path: Path, api_client: TestClient):
    assert api_client.get("/api/recipes/search").status_code == 400
    assert not trace_log_path.exists()

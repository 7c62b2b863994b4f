"""
Trace logging utilities for Zairyo.

Writes search and detection requests to JSONL so we can replay/debug them.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any

from app.core.config import get_settings
from app.schemas.recipes import DetectionResult, IngredientTermSet, SearchResult

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


class TraceLogger:
    """Append-only JSONL logger for search and detection requests."""

    def __init__(self, log_path: Path | None = None):
        self.log_path = Path(log_path) if log_path else BACKEND_DIR / get_settings().trace_log_path
        self._lock = Lock()

    def _append(self, entry: dict[str, Any]) -> None:
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(entry, ensure_ascii=False)
            with self._lock:
                with self.log_path.open("a", encoding="utf-8") as log_file:
                    log_file.write(serialized + "\n")
        except Exception as exc:  # pragma: no cover - logging failure shouldn't break requests
            logger.warning("Failed to persist trace: %s", exc)

    def log_search(
        self,
        request_id: str,
        query: str,
        term_set: IngredientTermSet,
        result: SearchResult,
        external_enabled: bool,
    ) -> None:
        self._append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "kind": "search",
            "query": query,
            "terms_en": term_set.english,
            "terms_jp": term_set.japanese,
            "external_enabled": external_enabled,
            "source": result.source_label.value,
            "local_count": result.local_count,
            "external_count": result.external_count,
        })

    def log_detection(
        self,
        request_id: str,
        backend: str,
        image_bytes: int,
        result: DetectionResult,
    ) -> None:
        self._append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "kind": "detect",
            "backend": backend,
            "image_bytes": image_bytes,
            "provenance": result.provenance.value,
            "confidence": result.confidence,
            "terms_en": result.english,
            "terms_jp": result.japanese,
        })


_TRACE_LOGGER: TraceLogger | None = None


def get_trace_logger() -> TraceLogger:
    """Return a singleton TraceLogger instance."""
    global _TRACE_LOGGER
    if _TRACE_LOGGER is None:
        _TRACE_LOGGER = TraceLogger()
    return _TRACE_LOGGER


def set_trace_logger(logger_instance: TraceLogger | None) -> None:
    """Override the global trace logger (primarily for tests)."""
    global _TRACE_LOGGER
    _TRACE_LOGGER = logger_instance

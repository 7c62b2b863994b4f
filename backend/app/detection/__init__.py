"""
Ingredient detection strategies and the adapter that normalizes their output.
"""

from .adapter import DetectorAdapter, DetectorBackend
from .base import IngredientDetector, RawDetection
from .heuristic import LocalHeuristicDetector
from .vision import VisionDetector, VisionPayloadError, parse_vision_reply

__all__ = [
    "DetectorAdapter",
    "DetectorBackend",
    "IngredientDetector",
    "RawDetection",
    "LocalHeuristicDetector",
    "VisionDetector",
    "VisionPayloadError",
    "parse_vision_reply",
]

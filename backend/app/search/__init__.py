"""
Recipe search: cross-source resolution and request tracing.
"""

from .resolver import RecipeResolver
from .trace_logger import TraceLogger, get_trace_logger, set_trace_logger

__all__ = ["RecipeResolver", "TraceLogger", "get_trace_logger", "set_trace_logger"]

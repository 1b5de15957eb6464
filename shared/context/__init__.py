"""Context window management for capability results."""

from .compactor import DEFAULT_SHAPES, ContextCompactor, ResultShape, count_sources

__all__ = ["ContextCompactor", "DEFAULT_SHAPES", "ResultShape", "count_sources"]

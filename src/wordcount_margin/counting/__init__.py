"""Span counting and label formatting."""

from .counter import LABEL_FORMAT, CountResult, count, count_range

__all__ = ["CountResult", "LABEL_FORMAT", "count", "count_range"]

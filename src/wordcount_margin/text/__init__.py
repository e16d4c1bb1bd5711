"""Snapshots, ranges and character classification."""

from .classify import SEPARATOR_CATEGORIES, is_separator, is_whitespace
from .ranges import RangeSet, TextRange
from .snapshot import LINE_BREAKS, TextSnapshot
from .validation import RangeValidationError, ensure_range

__all__ = [
    "LINE_BREAKS",
    "SEPARATOR_CATEGORIES",
    "RangeSet",
    "RangeValidationError",
    "TextRange",
    "TextSnapshot",
    "ensure_range",
    "is_separator",
    "is_whitespace",
]

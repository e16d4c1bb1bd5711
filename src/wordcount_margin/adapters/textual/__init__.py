"""Textual ``TextArea`` host for the word count margin."""

from .controller import (
    Location,
    TextAreaHost,
    offset_for_location,
    selection_to_ranges,
)

__all__ = ["Location", "TextAreaHost", "offset_for_location", "selection_to_ranges"]

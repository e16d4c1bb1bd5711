"""Bounds checks shared by snapshots and range sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .ranges import TextRange
    from .snapshot import TextSnapshot


class RangeValidationError(ValueError):
    """Raised when an offset or range does not fit the snapshot it targets."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_range(snapshot: "TextSnapshot", text_range: "TextRange") -> "TextRange":
    if text_range.end > len(snapshot):
        raise RangeValidationError(
            f"Range {text_range} exceeds snapshot length {len(snapshot)}",
            offset=text_range.end,
        )
    return text_range

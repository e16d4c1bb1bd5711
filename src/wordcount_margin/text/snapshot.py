"""Immutable document snapshots handed to the counter."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Tuple

from .validation import RangeValidationError

# Boundaries recognised by ``str.splitlines``; ``"\r\n"`` counts once.
LINE_BREAKS = frozenset("\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029")


def _line_starts(text: str) -> Tuple[int, ...]:
    starts = [0]
    offset = 0
    for chunk in text.splitlines(keepends=True):
        offset += len(chunk)
        starts.append(offset)
    if text and text[-1] not in LINE_BREAKS:
        # The final chunk has no terminator, so no line starts after it.
        starts.pop()
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class TextSnapshot:
    """Point-in-time view of a document's full text.

    Snapshots never change once built; an edit produces a new snapshot with
    a bumped ``version``. The line table is computed eagerly so that line
    lookups from the background thread never touch mutable state.
    """

    text: str = ""
    version: int = 0
    _starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_starts", _line_starts(self.text))

    def __len__(self) -> int:
        return len(self.text)

    def __getitem__(self, index: int) -> str:
        return self.text[index]

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def with_text(self, text: str) -> "TextSnapshot":
        return TextSnapshot(text=text, version=self.version + 1)

    def get_line_number_from_position(self, position: int) -> int:
        """Return the zero-based line containing ``position``.

        ``position`` may equal ``len(self)``; a position right after a line
        break belongs to the following line.
        """

        if position < 0 or position > len(self.text):
            raise RangeValidationError(
                f"Position {position} outside snapshot of length {len(self.text)}",
                offset=position,
            )
        return bisect_right(self._starts, position) - 1

    def get_line_start(self, line: int) -> int:
        if line < 0 or line >= len(self._starts):
            raise RangeValidationError(f"Line {line} out of range", offset=line)
        return self._starts[line]

    def offset_for_location(self, line: int, column: int) -> int:
        """Translate a ``(line, column)`` pair into an absolute offset."""

        offset = self.get_line_start(line) + column
        if column < 0 or offset > len(self.text):
            raise RangeValidationError(
                f"Column {column} out of range on line {line}", offset=offset
            )
        return offset

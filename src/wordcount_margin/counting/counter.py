"""Character, word and line counting over normalized range sets."""

from __future__ import annotations

from dataclasses import dataclass

from wordcount_margin.text import (
    RangeSet,
    TextRange,
    TextSnapshot,
    is_separator,
    is_whitespace,
)

LABEL_FORMAT = "Chars: {chars}  Words: {words}  Lines: {lines}"


@dataclass(frozen=True, slots=True)
class CountResult:
    char_count: int = 0
    word_count: int = 0
    line_count: int = 0

    def __add__(self, other: "CountResult") -> "CountResult":
        if not isinstance(other, CountResult):
            return NotImplemented
        return CountResult(
            char_count=self.char_count + other.char_count,
            word_count=self.word_count + other.word_count,
            line_count=self.line_count + other.line_count,
        )

    def format_label(self) -> str:
        return LABEL_FORMAT.format(
            chars=self.char_count, words=self.word_count, lines=self.line_count
        )


def count_range(snapshot: TextSnapshot, text_range: TextRange) -> CountResult:
    """Count one range in isolation.

    Word detection restarts at ``text_range.start``: the first non-separator
    of every range opens a word even if the preceding character in the
    snapshot is part of the same word.
    """

    if text_range.is_empty:
        return CountResult()

    chars = 0
    words = 0
    prev_separator = True
    for ch in snapshot.text[text_range.start : text_range.end]:
        separator = is_separator(ch)
        if not is_whitespace(ch):
            chars += 1
        if prev_separator and not separator:
            words += 1
        prev_separator = separator

    start_line = snapshot.get_line_number_from_position(text_range.start)
    end_line = snapshot.get_line_number_from_position(text_range.end)
    return CountResult(
        char_count=chars, word_count=words, line_count=end_line - start_line + 1
    )


def count(range_set: RangeSet) -> CountResult:
    """Sum per-range counts; overlapping ranges are not deduplicated."""

    total = CountResult()
    for text_range in range_set:
        total += count_range(range_set.snapshot, text_range)
    return total


__all__ = ["CountResult", "LABEL_FORMAT", "count", "count_range"]

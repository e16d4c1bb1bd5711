"""Unicode character classes that drive word and character counting."""

from __future__ import annotations

import unicodedata

# Punctuation, math symbols, separators and controls end a word. Dash
# punctuation (``Pd``) is left out so that hyphenated words count once.
SEPARATOR_CATEGORIES = frozenset(
    {
        "Pc",  # connector punctuation
        "Ps",  # open punctuation
        "Pe",  # close punctuation
        "Sm",  # math symbol
        "Po",  # other punctuation
        "Zs",  # space separator
        "Zl",  # line separator
        "Zp",  # paragraph separator
        "Cc",  # control
    }
)

WHITESPACE_CATEGORIES = frozenset({"Zs", "Zl", "Zp"})
WHITESPACE_CONTROLS = frozenset("\t\n\v\f\r\x85")


def is_separator(ch: str) -> bool:
    return unicodedata.category(ch) in SEPARATOR_CATEGORIES


def is_whitespace(ch: str) -> bool:
    """Space separators plus the tab, line feed and carriage-return family.

    Narrower than ``str.isspace``: the information separators
    ``\\x1c``-``\\x1f`` are not treated as whitespace.
    """

    return ch in WHITESPACE_CONTROLS or unicodedata.category(ch) in WHITESPACE_CATEGORIES


__all__ = [
    "SEPARATOR_CATEGORIES",
    "WHITESPACE_CATEGORIES",
    "WHITESPACE_CONTROLS",
    "is_separator",
    "is_whitespace",
]

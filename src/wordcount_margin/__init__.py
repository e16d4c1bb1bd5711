"""Live character, word and line counts for an editor view."""

__all__ = [
    "adapters",
    "config",
    "counting",
    "host",
    "margin",
    "runtime",
    "scheduler",
    "text",
]

__version__ = "0.1.0"

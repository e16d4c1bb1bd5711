"""Boundary between the margin and the editor that hosts it."""

from __future__ import annotations

from typing import Callable, Dict, Protocol

from wordcount_margin.text import RangeSet, TextRange, TextSnapshot, ensure_range

TEXT_CHANGED = "text.changed"
SELECTION_CHANGED = "selection.changed"

Listener = Callable[[object], None]


class TextViewHost(Protocol):
    """What the margin needs from an editor view."""

    def get_snapshot(self) -> TextSnapshot:
        """Return the current immutable document text."""
        ...

    def get_selection_ranges(self) -> RangeSet:
        """Return the selected ranges; an empty set means nothing is selected."""
        ...

    def subscribe(self, event: str, callback: Listener) -> None:
        ...

    def unsubscribe(self, event: str, callback: Listener) -> None:
        ...


class HostBus:
    """Small event bus hosts use to fan out change notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, []))


class InMemoryTextView:
    """Reference host backed by a snapshot and a list of selected ranges.

    Every edit replaces the snapshot and clears the selection, since ranges
    of the old snapshot no longer line up with the new text.
    """

    def __init__(self, text: str = "", *, bus: HostBus | None = None) -> None:
        self.bus = bus or HostBus()
        self._snapshot = TextSnapshot(text=text)
        self._selection = RangeSet.empty(self._snapshot)

    def get_snapshot(self) -> TextSnapshot:
        return self._snapshot

    def get_selection_ranges(self) -> RangeSet:
        return self._selection

    def subscribe(self, event: str, callback: Listener) -> None:
        self.bus.subscribe(event, callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        self.bus.unsubscribe(event, callback)

    def set_text(self, text: str) -> TextSnapshot:
        self._snapshot = self._snapshot.with_text(text)
        self._selection = RangeSet.empty(self._snapshot)
        self.bus.emit(TEXT_CHANGED, self._snapshot)
        return self._snapshot

    def insert(self, offset: int, text: str) -> TextSnapshot:
        ensure_range(self._snapshot, TextRange(offset, offset))
        current = self._snapshot.text
        return self.set_text(current[:offset] + text + current[offset:])

    def delete(self, text_range: TextRange) -> TextSnapshot:
        ensure_range(self._snapshot, text_range)
        current = self._snapshot.text
        return self.set_text(current[: text_range.start] + current[text_range.end :])

    def set_selection(self, *ranges: TextRange) -> RangeSet:
        self._selection = RangeSet.normalize(self._snapshot, ranges)
        self.bus.emit(SELECTION_CHANGED, self._selection)
        return self._selection

    def select_all(self) -> RangeSet:
        return self.set_selection(TextRange(0, len(self._snapshot)))

    def clear_selection(self) -> RangeSet:
        return self.set_selection()


def counting_ranges(host: TextViewHost) -> RangeSet:
    """Selected ranges, or the whole document when nothing is selected.

    The host is read once; the fallback reuses the snapshot the selection was
    taken against, so one pass never mixes two document versions.
    """

    selection = host.get_selection_ranges()
    if selection.is_empty:
        return RangeSet.whole(selection.snapshot)
    return selection


__all__ = [
    "HostBus",
    "InMemoryTextView",
    "Listener",
    "SELECTION_CHANGED",
    "TEXT_CHANGED",
    "TextViewHost",
    "counting_ranges",
]

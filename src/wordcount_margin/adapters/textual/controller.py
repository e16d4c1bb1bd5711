"""TextViewHost implementation backed by a Textual ``TextArea``."""

from __future__ import annotations

import threading
from typing import Tuple

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from wordcount_margin.host import (
    SELECTION_CHANGED,
    TEXT_CHANGED,
    HostBus,
    Listener,
)
from wordcount_margin.text import RangeSet, TextRange, TextSnapshot

Location = Tuple[int, int]  # (row, column)


def offset_for_location(snapshot: TextSnapshot, location: Location) -> int:
    row, column = location
    return snapshot.offset_for_location(row, column)


def selection_to_ranges(snapshot: TextSnapshot, selection: Selection) -> RangeSet:
    """Convert a Textual selection (anchor may follow cursor) into a range set."""

    start = offset_for_location(snapshot, selection.start)
    end = offset_for_location(snapshot, selection.end)
    if start > end:
        start, end = end, start
    return RangeSet.normalize(snapshot, [TextRange(start, end)])


class TextAreaHost:
    """Exposes a ``TextArea`` to the margin.

    Reads happen on the margin's updater thread. The snapshot is rebuilt only
    when the widget text differs from the last one seen, which keeps the
    version counter meaningful across selection-only changes.
    """

    def __init__(self, text_area: TextArea, *, bus: HostBus | None = None) -> None:
        self.text_area = text_area
        self.bus = bus or HostBus()
        self._lock = threading.Lock()
        self._snapshot = TextSnapshot(text=text_area.text)

    def get_snapshot(self) -> TextSnapshot:
        text = self.text_area.text
        with self._lock:
            if text != self._snapshot.text:
                self._snapshot = self._snapshot.with_text(text)
            return self._snapshot

    def get_selection_ranges(self) -> RangeSet:
        snapshot = self.get_snapshot()
        selection = self.text_area.selection
        return selection_to_ranges(snapshot, selection)

    def subscribe(self, event: str, callback: Listener) -> None:
        self.bus.subscribe(event, callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        self.bus.unsubscribe(event, callback)

    def notify_text_changed(self, payload: object | None = None) -> None:
        self.bus.emit(TEXT_CHANGED, payload)

    def notify_selection_changed(self, payload: object | None = None) -> None:
        self.bus.emit(SELECTION_CHANGED, payload)


__all__ = ["Location", "TextAreaHost", "offset_for_location", "selection_to_ranges"]

from __future__ import annotations

from types import SimpleNamespace
from typing import List

import pytest
from textual.widgets.text_area import Selection

from wordcount_margin.adapters.textual import (
    TextAreaHost,
    offset_for_location,
    selection_to_ranges,
)
from wordcount_margin.config import MarginSettings
from wordcount_margin.counting import count
from wordcount_margin.host import SELECTION_CHANGED, TEXT_CHANGED, counting_ranges
from wordcount_margin.margin import WordCountMargin
from wordcount_margin.text import RangeSet, RangeValidationError, TextRange, TextSnapshot


def make_text_area(text: str, selection: Selection | None = None) -> SimpleNamespace:
    return SimpleNamespace(text=text, selection=selection or Selection((0, 0), (0, 0)))


def test_offset_for_location_walks_lines() -> None:
    snapshot = TextSnapshot(text="first\nsecond\r\nthird")

    assert offset_for_location(snapshot, (0, 0)) == 0
    assert offset_for_location(snapshot, (1, 3)) == 9
    assert offset_for_location(snapshot, (2, 5)) == 19


def test_selection_to_ranges_orders_reversed_selection() -> None:
    snapshot = TextSnapshot(text="hello world")

    forward = selection_to_ranges(snapshot, Selection((0, 6), (0, 11)))
    backward = selection_to_ranges(snapshot, Selection((0, 11), (0, 6)))

    assert list(forward) == [TextRange(6, 11)]
    assert list(backward) == list(forward)


def test_cursor_only_selection_is_empty() -> None:
    snapshot = TextSnapshot(text="hello")

    assert selection_to_ranges(snapshot, Selection.cursor((0, 2))).is_empty


def test_selection_beyond_text_is_rejected() -> None:
    snapshot = TextSnapshot(text="ab")

    with pytest.raises(RangeValidationError):
        selection_to_ranges(snapshot, Selection((0, 0), (4, 0)))


def test_host_reuses_snapshot_until_text_changes() -> None:
    text_area = make_text_area("abc")
    host = TextAreaHost(text_area)

    first = host.get_snapshot()
    assert host.get_snapshot() is first

    text_area.text = "abcd"
    second = host.get_snapshot()

    assert second.text == "abcd"
    assert second.version == first.version + 1


def test_host_counts_selection_or_document() -> None:
    text_area = make_text_area("one two\nthree")
    host = TextAreaHost(text_area)

    assert count(counting_ranges(host)).format_label() == "Chars: 11  Words: 3  Lines: 2"

    text_area.selection = Selection((0, 4), (1, 5))
    assert count(counting_ranges(host)).format_label() == "Chars: 8  Words: 2  Lines: 2"


def test_host_notifications_reach_subscribers() -> None:
    host = TextAreaHost(make_text_area(""))
    seen: List[str] = []
    host.subscribe(TEXT_CHANGED, lambda payload: seen.append("text"))
    host.subscribe(SELECTION_CHANGED, lambda payload: seen.append("selection"))

    host.notify_text_changed()
    host.notify_selection_changed()

    assert seen == ["text", "selection"]


def test_margin_over_text_area_host_disposes_cleanly() -> None:
    host = TextAreaHost(make_text_area("words in a box"))
    margin = WordCountMargin(host, settings=MarginSettings())

    margin.dispose()

    assert host.bus.subscriber_count(TEXT_CHANGED) == 0
    assert not margin.scheduler.running


class EditingTextArea:
    """Text area whose text moves on after every read, like a user typing."""

    def __init__(self, *texts: str) -> None:
        self._texts = list(texts)
        self.selection = Selection.cursor((0, 0))

    @property
    def text(self) -> str:
        if len(self._texts) > 1:
            return self._texts.pop(0)
        return self._texts[0]


def test_counting_reads_one_document_version_per_pass() -> None:
    text_area = EditingTextArea("zero", "one two", "one two three four")
    host = TextAreaHost(text_area)  # consumes "zero"

    ranges = counting_ranges(host)

    assert ranges.snapshot.text == "one two"
    assert count(ranges) == count(RangeSet.whole(TextSnapshot(text="one two")))
    assert count(ranges).word_count == 2

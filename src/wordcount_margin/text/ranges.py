"""Character ranges and normalized range collections over a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from .snapshot import TextSnapshot
from .validation import RangeValidationError, ensure_range


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` interval of character offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise RangeValidationError("Range start is negative", offset=self.start)
        if self.start > self.end:
            raise RangeValidationError(
                f"Range start {self.start} is after end {self.end}",
                offset=self.start,
            )

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class RangeSet:
    """Sorted, disjoint ranges that all point into the same snapshot.

    Build instances through ``normalize`` or ``whole``; the raw constructor
    trusts its caller.
    """

    snapshot: TextSnapshot
    ranges: Tuple[TextRange, ...] = ()

    @classmethod
    def whole(cls, snapshot: TextSnapshot) -> "RangeSet":
        return cls(snapshot=snapshot, ranges=(TextRange(0, len(snapshot)),))

    @classmethod
    def empty(cls, snapshot: TextSnapshot) -> "RangeSet":
        return cls(snapshot=snapshot)

    @classmethod
    def normalize(
        cls, snapshot: TextSnapshot, ranges: Iterable[TextRange]
    ) -> "RangeSet":
        """Sort ``ranges``, merge overlapping or touching ones, drop empties."""

        ordered = sorted(
            (ensure_range(snapshot, item) for item in ranges),
            key=lambda item: (item.start, item.end),
        )
        merged: list[TextRange] = []
        for item in ordered:
            if item.is_empty:
                continue
            if merged and item.start <= merged[-1].end:
                last = merged[-1]
                merged[-1] = TextRange(last.start, max(last.end, item.end))
            else:
                merged.append(item)
        return cls(snapshot=snapshot, ranges=tuple(merged))

    def __iter__(self) -> Iterator[TextRange]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    @property
    def is_empty(self) -> bool:
        return not self.ranges

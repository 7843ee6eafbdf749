from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List
from .types import Float, FUZZY_TOLERANCE


def _fmt(v: Float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".")


@dataclass(eq=False)
class SetPoint:
    """(x, membership) pair; equality within FUZZY_TOLERANCE on both axes."""
    x: Float
    y: Float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SetPoint):
            return NotImplemented
        return (abs(self.x - other.x) < FUZZY_TOLERANCE and
                abs(self.y - other.y) < FUZZY_TOLERANCE)

    __hash__ = None  # mutable, tolerance-equal

    def in_vertical_alignment(self, other: SetPoint) -> bool:
        return abs(self.x - other.x) < FUZZY_TOLERANCE

    def in_horizontal_alignment(self, other: SetPoint) -> bool:
        return abs(self.y - other.y) < FUZZY_TOLERANCE

    def copy(self) -> SetPoint:
        return SetPoint(self.x, self.y)

    def __str__(self) -> str:
        return f"({_fmt(self.x)}, {_fmt(self.y)})"


@dataclass
class Interval:
    low: Float
    low_open: bool
    high: Float
    high_open: bool

    def _key(self):
        # closed low bound sorts before an open one at the same x
        return (self.low, self.low_open, self.high, self.high_open)

    def __lt__(self, other: Interval) -> bool:
        return self._key() < other._key()

    def contains(self, x: Float) -> bool:
        if x < self.low or (x == self.low and self.low_open):
            return False
        if x > self.high or (x == self.high and self.high_open):
            return False
        return True

    def is_subset_of(self, other: Interval) -> bool:
        if self.low < other.low - FUZZY_TOLERANCE:
            return False
        if abs(self.low - other.low) < FUZZY_TOLERANCE and other.low_open and not self.low_open:
            return False
        if self.high > other.high + FUZZY_TOLERANCE:
            return False
        if abs(self.high - other.high) < FUZZY_TOLERANCE and other.high_open and not self.high_open:
            return False
        return True

    def copy(self) -> Interval:
        return Interval(self.low, self.low_open, self.high, self.high_open)

    def __str__(self) -> str:
        lb = "(" if self.low_open else "["
        rb = ")" if self.high_open else "]"
        return f"{lb}{_fmt(self.low)}, {_fmt(self.high)}{rb}"


class IntervalVector:
    """Ordered, growable list of intervals; elements are copied in."""

    def __init__(self, intervals: Iterable[Interval] = ()) -> None:
        self._items: List[Interval] = [iv.copy() for iv in intervals]

    def add(self, interval: Interval) -> None:
        self._items.append(interval.copy())

    def add_all(self, other: Iterable[Interval]) -> None:
        for iv in other:
            self.add(iv)

    def remove(self, index: int) -> Interval:
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def is_empty(self) -> bool:
        return not self._items

    def contains(self, x: Float) -> bool:
        return any(iv.contains(x) for iv in self._items)

    def is_subset_of(self, other: IntervalVector) -> bool:
        return all(any(iv.is_subset_of(o) for o in other) for iv in self._items)

    def __getitem__(self, i: int) -> Interval:
        return self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._items)

    def __str__(self) -> str:
        return " ".join(str(iv) for iv in self._items)

    def __repr__(self) -> str:
        return f"IntervalVector({self._items!r})"

"""Cursor ranges and multi-cursor selections."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional, Tuple

VisualPosition = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class Range:
    """A single cursor range.

    ``anchor`` stays put while ``head`` follows the cursor; both are character
    offsets. ``old_visual_position`` is a rendering hint for vertical motions
    and plays no part in editing.
    """

    anchor: int
    head: int
    old_visual_position: Optional[VisualPosition] = None

    @classmethod
    def point(cls, offset: int) -> "Range":
        return cls(anchor=offset, head=offset)

    @property
    def from_(self) -> int:
        return min(self.anchor, self.head)

    @property
    def to(self) -> int:
        return max(self.anchor, self.head)

    def __len__(self) -> int:
        return self.to - self.from_

    @property
    def direction(self) -> str:
        return "backward" if self.head < self.anchor else "forward"

    def cursor(self) -> int:
        """Offset of the cell the cursor occupies.

        A forward range covers ``[anchor, head)``, so its cursor sits on the
        last selected character rather than on ``head`` itself.
        """

        if self.head > self.anchor:
            return self.head - 1
        return self.head

    def flip(self) -> "Range":
        return replace(self, anchor=self.head, head=self.anchor)

    def overlaps(self, other: "Range") -> bool:
        return self.from_ == other.from_ or (
            self.to > other.from_ and other.to > self.from_
        )

    def merge(self, other: "Range") -> "Range":
        start = min(self.from_, other.from_)
        end = max(self.to, other.to)
        if self.direction == "backward":
            return Range(anchor=end, head=start)
        return Range(anchor=start, head=end)


@dataclass(frozen=True, slots=True)
class Selection:
    """Ordered, immutable collection of ranges with a primary index."""

    ranges: Tuple[Range, ...] = ()
    primary_index: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranges", tuple(self.ranges))
        if self.ranges and not 0 <= self.primary_index < len(self.ranges):
            raise ValueError("primary_index out of range")

    @classmethod
    def single(cls, anchor: int, head: Optional[int] = None) -> "Selection":
        return cls(ranges=(Range(anchor, anchor if head is None else head),))

    @classmethod
    def points(cls, offsets: Iterable[int]) -> "Selection":
        return cls(ranges=tuple(Range.point(offset) for offset in offsets))

    def __iter__(self) -> Iterator[Range]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def __getitem__(self, index: int) -> Range:
        return self.ranges[index]

    @property
    def primary(self) -> Range:
        return self.ranges[self.primary_index]

    def cursors(self) -> tuple[int, ...]:
        return tuple(r.cursor() for r in self.ranges)

    def normalized(self) -> "Selection":
        """Return the ranges sorted by position with overlaps merged."""

        if not self.ranges:
            return self
        primary = self.primary
        ordered = sorted(self.ranges, key=lambda r: (r.from_, r.to))
        merged: list[Range] = []
        primary_index = 0
        for current in ordered:
            if merged and merged[-1].overlaps(current):
                merged[-1] = merged[-1].merge(current)
            else:
                merged.append(current)
            if current is primary:
                primary_index = len(merged) - 1
        return Selection(ranges=tuple(merged), primary_index=primary_index)


__all__ = ["Range", "Selection", "VisualPosition"]

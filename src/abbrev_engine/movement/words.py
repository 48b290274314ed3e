"""Word motions over a character sequence.

These are the motions behind ``w``/``b``/``e`` style navigation. The
abbreviation builder reuses ``move_prev_word_start`` so that "the previous
word" always means exactly what backwards word movement would select.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Sequence

from abbrev_engine.buffer.selection import Range

from .chars import is_line_ending, is_long_word_boundary, is_word_boundary


class WordMotionTarget(str, Enum):
    NEXT_WORD_START = "next_word_start"
    NEXT_WORD_END = "next_word_end"
    PREV_WORD_START = "prev_word_start"
    PREV_WORD_END = "prev_word_end"
    NEXT_LONG_WORD_START = "next_long_word_start"
    NEXT_LONG_WORD_END = "next_long_word_end"
    PREV_LONG_WORD_START = "prev_long_word_start"
    PREV_LONG_WORD_END = "prev_long_word_end"

    @property
    def is_prev(self) -> bool:
        return self.name.startswith("PREV_")

    @property
    def is_long(self) -> bool:
        return "_LONG_" in self.name

    @property
    def stops_at_start(self) -> bool:
        """True for targets that land on the first character after a boundary."""

        return self in {
            WordMotionTarget.NEXT_WORD_START,
            WordMotionTarget.NEXT_LONG_WORD_START,
            WordMotionTarget.PREV_WORD_END,
            WordMotionTarget.PREV_LONG_WORD_END,
        }


class _CharWalker:
    """Bidirectional character iterator anchored between two offsets.

    ``next`` yields the character ahead of the position in the walking
    direction and steps over it; ``prev`` undoes that step.
    """

    def __init__(self, text: Sequence[str], position: int, *, reverse: bool) -> None:
        self._text = text
        self._position = position
        self._reverse = reverse

    def _forward(self) -> Optional[str]:
        if self._position >= len(self._text):
            return None
        ch = self._text[self._position]
        self._position += 1
        return ch

    def _backward(self) -> Optional[str]:
        if self._position <= 0:
            return None
        self._position -= 1
        return self._text[self._position]

    def next(self) -> Optional[str]:
        return self._backward() if self._reverse else self._forward()

    def prev(self) -> Optional[str]:
        return self._forward() if self._reverse else self._backward()


def _reached_target(target: WordMotionTarget, prev_ch: str, next_ch: str) -> bool:
    boundary = is_long_word_boundary if target.is_long else is_word_boundary
    if not boundary(prev_ch, next_ch):
        return False
    if target.stops_at_start:
        return is_line_ending(next_ch) or not next_ch.isspace()
    return not prev_ch.isspace() or is_line_ending(next_ch)


def _range_to_target(
    text: Sequence[str], target: WordMotionTarget, origin: Range
) -> Range:
    walker = _CharWalker(text, origin.head, reverse=target.is_prev)
    advance: Callable[[int], int]
    if target.is_prev:
        advance = lambda idx: max(idx - 1, 0)  # noqa: E731
    else:
        advance = lambda idx: idx + 1  # noqa: E731

    anchor = origin.anchor
    head = origin.head
    prev_ch = walker.prev()
    if prev_ch is not None:
        walker.next()

    # Line endings directly ahead are stepped over before looking for a word.
    while True:
        ch = walker.next()
        if ch is None:
            break
        if is_line_ending(ch):
            prev_ch = ch
            head = advance(head)
        else:
            walker.prev()
            break
    if prev_ch is not None and is_line_ending(prev_ch):
        anchor = head

    head_start = head
    while True:
        next_ch = walker.next()
        if next_ch is None:
            break
        if prev_ch is None or _reached_target(target, prev_ch, next_ch):
            if head == head_start:
                anchor = head
            else:
                break
        prev_ch = next_ch
        head = advance(head)

    return Range(anchor=anchor, head=head)


def word_move(
    text: Sequence[str], range_: Range, count: int, target: WordMotionTarget
) -> Range:
    """Move ``range_`` ``count`` words towards ``target``.

    The returned range selects the word travelled over: for backward targets
    ``head`` is where the motion stopped and ``anchor`` where the word ends.
    """

    length = len(text)
    if (target.is_prev and range_.head == 0) or (
        not target.is_prev and range_.head == length
    ):
        return range_

    if target.is_prev:
        if range_.anchor < range_.head:
            current = Range(anchor=range_.head, head=max(range_.head - 1, 0))
        else:
            current = Range(anchor=min(range_.head + 1, length), head=range_.head)
    else:
        if range_.anchor < range_.head:
            current = Range(anchor=max(range_.head - 1, 0), head=range_.head)
        else:
            current = Range(anchor=range_.head, head=min(range_.head + 1, length))

    for _ in range(count):
        moved = _range_to_target(text, target, current)
        if moved == current:
            break
        current = moved
    return current


def move_prev_word_start(text: Sequence[str], range_: Range, count: int = 1) -> Range:
    return word_move(text, range_, count, WordMotionTarget.PREV_WORD_START)


def move_prev_word_end(text: Sequence[str], range_: Range, count: int = 1) -> Range:
    return word_move(text, range_, count, WordMotionTarget.PREV_WORD_END)


def move_next_word_start(text: Sequence[str], range_: Range, count: int = 1) -> Range:
    return word_move(text, range_, count, WordMotionTarget.NEXT_WORD_START)


def move_next_word_end(text: Sequence[str], range_: Range, count: int = 1) -> Range:
    return word_move(text, range_, count, WordMotionTarget.NEXT_WORD_END)


def move_prev_long_word_start(
    text: Sequence[str], range_: Range, count: int = 1
) -> Range:
    return word_move(text, range_, count, WordMotionTarget.PREV_LONG_WORD_START)


def move_next_long_word_start(
    text: Sequence[str], range_: Range, count: int = 1
) -> Range:
    return word_move(text, range_, count, WordMotionTarget.NEXT_LONG_WORD_START)


__all__ = [
    "WordMotionTarget",
    "move_next_long_word_start",
    "move_next_word_end",
    "move_next_word_start",
    "move_prev_long_word_start",
    "move_prev_word_end",
    "move_prev_word_start",
    "word_move",
]

"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sized


class DocumentRangeError(IndexError):
    """Raised when an offset or offset range falls outside a document."""

    def __init__(
        self, message: str, *, start: int | None = None, end: int | None = None
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


def ensure_offset(text: Sized, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise DocumentRangeError("Offset out of range", start=offset)
    return offset


def ensure_span(text: Sized, start: int, end: int) -> tuple[int, int]:
    ensure_offset(text, start)
    ensure_offset(text, end)
    if start > end:
        raise DocumentRangeError("Span start after end", start=start, end=end)
    return start, end

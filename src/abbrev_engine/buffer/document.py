"""Immutable document snapshots addressed by character offset."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import overload

from .validation import ensure_span


@dataclass(frozen=True, slots=True)
class Document(Sequence[str]):
    """Read-only text snapshot.

    Offsets count characters (code points), not bytes. Every edit produces a
    new ``Document`` with a bumped ``version``; a snapshot handed to the
    expansion builder can never change underneath it.
    """

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(text=text)

    def __len__(self) -> int:
        return len(self.text)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> str: ...

    def __getitem__(self, index: int | slice) -> str:
        return self.text[index]

    def __str__(self) -> str:
        return self.text

    def slice(self, start: int, end: int) -> str:
        """Return the characters in ``[start, end)``.

        Unlike ``text[start:end]`` this refuses to clamp: a span outside the
        document raises ``DocumentRangeError``.
        """

        start, end = ensure_span(self, start, end)
        return self.text[start:end]

    def replace(self, text: str) -> "Document":
        """Return the next version of this document holding ``text``."""

        return Document(text=text, version=self.version + 1)

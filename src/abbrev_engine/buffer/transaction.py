"""Changes and the transactions that group them into one atomic edit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Tuple

from .document import Document
from .selection import Range, Selection
from .validation import DocumentRangeError, ensure_span


@dataclass(frozen=True, slots=True)
class Change:
    """Replace ``[start, end)`` of the original document with ``text``.

    ``text=None`` deletes the span; ``start == end`` inserts.
    """

    start: int
    end: int
    text: Optional[str] = None

    @classmethod
    def insert(cls, offset: int, text: str) -> "Change":
        return cls(start=offset, end=offset, text=text)

    @property
    def inserted(self) -> str:
        return self.text or ""

    @property
    def delta(self) -> int:
        return len(self.inserted) - (self.end - self.start)


class TransactionConflictError(ValueError):
    """Raised when a transaction's changes overlap or run out of order."""

    def __init__(self, message: str, *, changes: Tuple[Change, ...] = ()) -> None:
        super().__init__(message)
        self.changes = changes


@dataclass(frozen=True, slots=True)
class Transaction:
    """Ordered changes, all addressed against the same original snapshot."""

    changes: Tuple[Change, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "changes", tuple(self.changes))

    @classmethod
    def change(cls, changes: Iterable[Change]) -> "Transaction":
        return cls(changes=tuple(changes))

    @classmethod
    def change_by_selection(
        cls,
        selection: Selection,
        build: Callable[[Range], Change],
    ) -> "Transaction":
        """Build one change per range, keeping the selection's order.

        Nothing is applied while building, so ``build`` sees every range
        against the same original document.
        """

        changes = []
        for range_ in selection:
            changes.append(build(range_))
        return cls(changes=tuple(changes))

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def validate(self, document: Document) -> None:
        previous: Change | None = None
        for change in self.changes:
            try:
                ensure_span(document, change.start, change.end)
            except DocumentRangeError as exc:
                raise TransactionConflictError(
                    f"Change {change} exceeds document length {len(document)}",
                    changes=(change,),
                ) from exc
            if previous is not None and change.start < previous.end:
                raise TransactionConflictError(
                    f"Change {change} overlaps or precedes {previous}",
                    changes=(previous, change),
                )
            previous = change

    def apply(self, document: Document) -> Document:
        """Return the document produced by applying every change at once."""

        self.validate(document)
        if self.is_empty:
            return document
        pieces = []
        cursor = 0
        for change in self.changes:
            pieces.append(document.text[cursor : change.start])
            pieces.append(change.inserted)
            cursor = change.end
        pieces.append(document.text[cursor:])
        return document.replace("".join(pieces))

    def map_position(self, offset: int) -> int:
        """Map an offset of the original document into the edited one.

        Positions inside, or at the edge of, a changed span land after the
        inserted text.
        """

        shift = 0
        for change in self.changes:
            if offset < change.start:
                break
            if offset <= change.end:
                return change.start + shift + len(change.inserted)
            shift += change.delta
        return offset + shift

    def map_selection(self, selection: Selection) -> Selection:
        """Collapse each range onto the end of the text inserted for it."""

        ranges = tuple(
            Range.point(self.map_position(range_.cursor())) for range_ in selection
        )
        return Selection(ranges=ranges, primary_index=selection.primary_index)


__all__ = ["Change", "Transaction", "TransactionConflictError"]

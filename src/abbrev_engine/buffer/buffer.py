"""High-level buffer façade combining document, selection, and undo."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from abbrev_engine.runtime import telemetry

from .document import Document
from .selection import Range, Selection
from .transaction import Transaction
from .undo import UndoEntry, UndoTimeline

WordFinder = Callable[[Sequence[str], Range, int], Range]


class CharExpander(Protocol):
    """Anything that turns a typed character into a transaction."""

    def expand_or_insert(
        self,
        document: Document,
        selection: Selection,
        char: str,
        *,
        oracle: Optional[WordFinder] = None,
    ) -> Transaction: ...


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        selection: Optional[Selection] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        # All three define __len__, so an empty instance is still a real argument.
        self.document = document if document is not None else Document()
        if selection is None:
            selection = Selection.single(0)
        self.selection = selection.normalized()
        self.undo_timeline = undo if undo is not None else UndoTimeline()

    @classmethod
    def from_text(
        cls, text: str, *, cursors: tuple[int, ...] = (0,), name: str = "default"
    ) -> "Buffer":
        return cls(
            name=name,
            document=Document.from_text(text),
            selection=Selection.points(cursors),
        )

    @property
    def text(self) -> str:
        return self.document.text

    def apply_transaction(self, transaction: Transaction, *, label: str) -> UndoEntry:
        """Apply ``transaction`` atomically and record it as one undo step."""

        with telemetry.span(
            name=f"buffer::{label}",
            component=True,
            metadata={"buffer": self.name, "changes": len(transaction)},
        ):
            before = self.document
            after = transaction.apply(before)
            selection_after = transaction.map_selection(self.selection).normalized()
            entry = UndoEntry(
                label=label,
                transaction=transaction,
                before=before,
                after=after,
                selection_before=self.selection,
                selection_after=selection_after,
            )
            self.document = after
            self.selection = selection_after
            self.undo_timeline.push(entry)
        return entry

    def type_char(
        self,
        char: str,
        table: CharExpander,
        *,
        oracle: Optional[WordFinder] = None,
    ) -> UndoEntry:
        """Expand-or-insert ``char`` at every cursor as a single undo step."""

        transaction = table.expand_or_insert(
            self.document, self.selection, char, oracle=oracle
        )
        return self.apply_transaction(transaction, label="insert_char")

    def undo(self) -> Optional[UndoEntry]:
        entry = self.undo_timeline.undo()
        if entry is not None:
            self.document = entry.before
            self.selection = entry.selection_before
        return entry

    def redo(self) -> Optional[UndoEntry]:
        entry = self.undo_timeline.redo()
        if entry is not None:
            self.document = entry.after
            self.selection = entry.selection_after
        return entry

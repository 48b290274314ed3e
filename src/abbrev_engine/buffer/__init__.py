"""Document snapshots, selections, transactions, and undo history."""

from .buffer import Buffer, CharExpander, WordFinder
from .document import Document
from .selection import Range, Selection
from .transaction import Change, Transaction, TransactionConflictError
from .undo import UndoEntry, UndoTimeline
from .validation import DocumentRangeError, ensure_offset, ensure_span

__all__ = [
    "Buffer",
    "CharExpander",
    "Change",
    "Document",
    "DocumentRangeError",
    "Range",
    "Selection",
    "Transaction",
    "TransactionConflictError",
    "UndoEntry",
    "UndoTimeline",
    "WordFinder",
    "ensure_offset",
    "ensure_span",
]

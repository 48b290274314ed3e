"""Turn a typed character into one expansion-or-insert transaction."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from abbrev_engine.buffer import Change, Document, Range, Selection, Transaction
from abbrev_engine.movement import move_prev_word_start
from abbrev_engine.runtime import telemetry


class WordBoundaryOracle(Protocol):
    """Finds the word before a position.

    Given a one-cell range it returns a range whose ``head`` is the start of the
    preceding word and whose ``anchor`` is just past its end, or a degenerate
    range when there is no such word.
    """

    def __call__(self, text: Sequence[str], range_: Range, count: int) -> Range: ...


class AbbreviationLookup(Protocol):
    def lookup(self, word: str) -> Optional[str]: ...


def expand_at(
    document: Document,
    range_: Range,
    table: AbbreviationLookup,
    typed_char: str,
    oracle: WordBoundaryOracle,
) -> Change:
    """Decide the change for a single cursor against ``document``."""

    cursor = range_.cursor()
    if cursor == 0:
        return Change.insert(cursor, typed_char)

    word_range = oracle(document, Range.point(cursor - 1), 1)
    if len(word_range) < 1:
        return Change.insert(cursor, typed_char)

    word = document.slice(word_range.from_, word_range.to)
    expansion = table.lookup(word)
    if expansion is None:
        return Change.insert(cursor, typed_char)

    telemetry.record_event(
        "abbreviations.expanded",
        level="debug",
        data={"abbreviation": word, "start": word_range.from_, "cursor": cursor},
    )
    return Change(start=word_range.from_, end=cursor, text=expansion + typed_char)


def build_transaction(
    document: Document,
    selection: Selection,
    table: AbbreviationLookup,
    typed_char: str,
    *,
    oracle: Optional[WordBoundaryOracle] = None,
) -> Transaction:
    """Expand the word before every cursor, or insert ``typed_char`` there.

    One change is produced per range, in selection order, each decided
    against the same unmodified ``document``.
    """

    find_word = oracle or move_prev_word_start
    with telemetry.span(
        "abbreviations::expand",
        component="abbreviations",
        metadata={"cursors": len(selection), "version": document.version},
    ):
        return Transaction.change_by_selection(
            selection,
            lambda range_: expand_at(document, range_, table, typed_char, find_word),
        )


__all__ = [
    "AbbreviationLookup",
    "WordBoundaryOracle",
    "build_transaction",
    "expand_at",
]

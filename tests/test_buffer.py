from __future__ import annotations

from typing import Sequence

import pytest

from abbrev_engine.abbreviations import AbbreviationTable
from abbrev_engine.buffer import (
    Buffer,
    Change,
    Document,
    DocumentRangeError,
    Range,
    Selection,
    Transaction,
    TransactionConflictError,
)


def make_table() -> AbbreviationTable:
    return AbbreviationTable.from_mapping({"btw": "by the way"})


def test_document_slice_and_bounds() -> None:
    document = Document.from_text("hello")

    assert len(document) == 5
    assert document[1] == "e"
    assert document.slice(1, 4) == "ell"
    assert document.slice(5, 5) == ""
    with pytest.raises(DocumentRangeError):
        document.slice(2, 10)
    with pytest.raises(DocumentRangeError):
        document.slice(3, 1)


def test_range_cursor_convention() -> None:
    assert Range.point(4).cursor() == 4
    assert Range(anchor=3, head=0).cursor() == 0
    assert Range(anchor=0, head=3).cursor() == 2
    assert len(Range(anchor=3, head=0)) == 3
    assert Range(anchor=3, head=0).flip() == Range(anchor=0, head=3)


def test_selection_normalized_merges_duplicates() -> None:
    selection = Selection.points([5, 1, 5])

    normalized = selection.normalized()

    assert normalized.ranges == (Range.point(1), Range.point(5))
    assert normalized.primary == Range.point(5)


def test_selection_rejects_bad_primary_index() -> None:
    with pytest.raises(ValueError):
        Selection(ranges=(Range.point(0),), primary_index=3)


def test_transaction_apply_replaces_and_inserts() -> None:
    document = Document.from_text("abc")
    transaction = Transaction.change([Change(0, 1, "X"), Change.insert(3, "!")])

    after = transaction.apply(document)

    assert after.text == "Xbc!"
    assert after.version == document.version + 1
    assert document.text == "abc"


def test_transaction_apply_deletion() -> None:
    after = Transaction.change([Change(1, 2)]).apply(Document.from_text("abc"))

    assert after.text == "ac"


def test_transaction_allows_inserts_at_same_offset() -> None:
    transaction = Transaction.change([Change.insert(1, "x"), Change.insert(1, "y")])

    assert transaction.apply(Document.from_text("abc")).text == "axybc"


@pytest.mark.parametrize(
    "changes",
    [
        [Change(0, 3, "x"), Change.insert(2, "y")],
        [Change.insert(3, "a"), Change.insert(0, "b")],
        [Change.insert(5, "x")],
    ],
)
def test_transaction_conflicts_raise(changes: list[Change]) -> None:
    transaction = Transaction.change(changes)

    with pytest.raises(TransactionConflictError):
        transaction.apply(Document.from_text("abc"))


def test_empty_transaction_keeps_document() -> None:
    document = Document.from_text("abc")

    assert Transaction().apply(document) is document


def test_map_position_through_expansion() -> None:
    transaction = Transaction.change([Change(0, 3, "by the way ")])

    assert transaction.map_position(3) == 11
    assert transaction.map_position(5) == 13


def test_type_char_records_single_undo_step() -> None:
    buffer = Buffer.from_text("say btw", cursors=(7,))

    entry = buffer.type_char(" ", make_table())

    assert buffer.text == "say by the way "
    assert buffer.selection.cursors() == (15,)
    assert entry.label == "insert_char"
    assert len(buffer.undo_timeline) == 1


def test_multi_cursor_keystroke_is_one_undo_step() -> None:
    buffer = Buffer.from_text("btw\nbtw", cursors=(3, 7))

    buffer.type_char(".", make_table())

    assert buffer.text == "by the way .\nby the way ."
    assert buffer.selection.cursors() == (12, 25)
    assert len(buffer.undo_timeline) == 1

    buffer.undo()
    assert buffer.text == "btw\nbtw"
    assert buffer.selection.cursors() == (3, 7)


def test_undo_and_redo_restore_state() -> None:
    buffer = Buffer.from_text("btw", cursors=(3,))
    buffer.type_char(" ", make_table())
    buffer.type_char("x", make_table())

    assert buffer.text == "by the way x"

    buffer.undo()
    assert buffer.text == "by the way "
    buffer.undo()
    assert buffer.text == "btw"
    assert buffer.undo() is None

    buffer.redo()
    assert buffer.text == "by the way "
    assert buffer.selection.cursors() == (11,)


def test_conflicting_transaction_leaves_buffer_untouched() -> None:
    buffer = Buffer.from_text("abc", cursors=(1,))
    transaction = Transaction.change([Change(0, 3, "x"), Change.insert(1, "y")])

    with pytest.raises(TransactionConflictError):
        buffer.apply_transaction(transaction, label="broken")

    assert buffer.text == "abc"
    assert len(buffer.undo_timeline) == 0


def test_cursors_expanding_the_same_word_conflict() -> None:
    buffer = Buffer.from_text("abc", cursors=(2, 3))
    table = AbbreviationTable.from_mapping({"ab": "AB", "abc": "ABC"})

    with pytest.raises(TransactionConflictError):
        buffer.type_char(" ", table)

    assert buffer.text == "abc"
    assert buffer.selection.cursors() == (2, 3)
    assert len(buffer.undo_timeline) == 0


def test_type_char_passes_word_finder_through() -> None:
    calls: list[Range] = []

    def whole_prefix(text: Sequence[str], range_: Range, count: int) -> Range:
        calls.append(range_)
        return Range(anchor=range_.head + 1, head=0)

    buffer = Buffer.from_text("x-btw", cursors=(5,))
    table = AbbreviationTable.from_mapping({"x-btw": "expanded"})

    buffer.type_char("!", table, oracle=whole_prefix)

    assert calls == [Range.point(4)]
    assert buffer.text == "expanded!"

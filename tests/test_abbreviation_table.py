from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from abbrev_engine.abbreviations import (
    AbbreviationTable,
    InvalidAbbreviationError,
    parse_line,
)
from abbrev_engine.runtime import telemetry


def make_table(**entries: str) -> AbbreviationTable:
    return AbbreviationTable.from_mapping(entries)


def test_insert_and_lookup() -> None:
    table = AbbreviationTable()

    table.insert("btw", "by the way")

    assert table.lookup("btw") == "by the way"
    assert table.lookup("omw") is None
    assert len(table) == 1


def test_insert_overwrites_existing_entry() -> None:
    table = make_table(btw="between")

    table.insert("btw", "by the way")

    assert table.lookup("btw") == "by the way"
    assert len(table) == 1


def test_insert_same_pair_twice_is_idempotent() -> None:
    table = AbbreviationTable()

    table.insert("btw", "by the way")
    table.insert("btw", "by the way")

    assert table.lookup("btw") == "by the way"
    assert table.as_dict() == {"btw": "by the way"}


def test_insert_rejects_empty_abbreviation() -> None:
    table = AbbreviationTable()

    with pytest.raises(InvalidAbbreviationError):
        table.insert("", "nothing")

    assert len(table) == 0


def test_remove_entry_and_missing_key() -> None:
    table = make_table(btw="by the way")

    table.remove("missing")
    assert table.as_dict() == {"btw": "by the way"}

    table.remove("btw")
    assert table.lookup("btw") is None
    assert len(table) == 0


def test_lookup_is_case_sensitive() -> None:
    table = make_table(btw="by the way")

    assert table.lookup("BTW") is None
    assert table.lookup("Btw") is None


def test_enumeration_helpers() -> None:
    table = make_table(btw="by the way", omw="on my way")

    assert "btw" in table
    assert "idk" not in table
    assert sorted(table) == ["btw", "omw"]
    assert dict(table.items()) == {"btw": "by the way", "omw": "on my way"}

    snapshot = table.as_dict()
    snapshot["idk"] = "I don't know"
    assert "idk" not in table


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("a b", ("a", "b")),
        ("omw on my way", ("omw", "on my way")),
        ("sig  two spaces", ("sig", " two spaces")),
        ("blank ", ("blank", "")),
        ("btw by the way\n", ("btw", "by the way")),
        ("btw by the way\r\n", ("btw", "by the way")),
        ("noSpaceHere", None),
        (" x", None),
        ("", None),
    ],
)
def test_parse_line(line: str, expected: tuple[str, str] | None) -> None:
    assert parse_line(line) == expected


def test_load_from_source_skips_malformed_lines() -> None:
    table = AbbreviationTable.load_from_source(
        ["a b", "noSpaceHere", " x", "omw on my way", ""]
    )

    assert table.lookup("a") == "b"
    assert table.lookup("omw") == "on my way"
    assert table.lookup("noSpaceHere") is None
    assert table.lookup("") is None
    assert len(table) == 2


def test_load_from_source_later_lines_win() -> None:
    table = AbbreviationTable.load_from_source(["btw between", "btw by the way"])

    assert table.lookup("btw") == "by the way"


def test_load_from_source_unreadable_source_yields_empty_table() -> None:
    def broken_source() -> Iterator[str]:
        yield "btw by the way"
        raise OSError("device went away")

    table = AbbreviationTable.load_from_source(broken_source())

    assert len(table) == 0


def test_load_from_path(tmp_path: Path) -> None:
    source = tmp_path / "abbreviations"
    source.write_text("btw by the way\nnoSpaceHere\nomw on my way\n", encoding="utf-8")

    table = AbbreviationTable.load_from_path(source)

    assert table.as_dict() == {"btw": "by the way", "omw": "on my way"}


def test_load_from_missing_path_yields_empty_table(tmp_path: Path) -> None:
    table = AbbreviationTable.load_from_path(tmp_path / "does-not-exist")

    assert len(table) == 0


def test_load_from_directory_yields_empty_table(tmp_path: Path) -> None:
    table = AbbreviationTable.load_from_path(tmp_path)

    assert len(table) == 0


def test_load_from_undecodable_file_yields_empty_table(tmp_path: Path) -> None:
    source = tmp_path / "abbreviations"
    source.write_bytes(b"btw by the way\n\xff\xfe\xfa broken\n")

    table = AbbreviationTable.load_from_path(source)

    assert len(table) == 0


def test_to_lines_reloads_to_equal_table() -> None:
    table = make_table(omw="on my way", btw="by the way")

    lines = table.to_lines()

    assert lines == ["btw by the way", "omw on my way"]
    assert AbbreviationTable.load_from_source(lines) == table


def test_undecodable_file_reports_path_and_no_load(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    events: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        telemetry,
        "record_event",
        lambda name, **kwargs: events.append((name, kwargs.get("data") or {})),
    )
    source = tmp_path / "abbreviations"
    source.write_bytes(b"btw by the way\n\xff\xfe broken\n")

    AbbreviationTable.load_from_path(source)

    names = [name for name, _ in events]
    assert names == ["abbreviations.load_failed"]
    assert events[0][1]["path"] == str(source)


def test_loaded_event_counts_entries(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    events: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        telemetry,
        "record_event",
        lambda name, **kwargs: events.append((name, kwargs.get("data") or {})),
    )
    source = tmp_path / "abbreviations"
    source.write_text("btw by the way\nomw on my way\n", encoding="utf-8")

    AbbreviationTable.load_from_path(source)

    assert events[-1] == (
        "abbreviations.loaded",
        {"path": str(source), "count": 2},
    )

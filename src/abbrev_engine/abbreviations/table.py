"""Abbreviation registry and its line-based loader."""

from __future__ import annotations

import os
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from abbrev_engine.buffer import Document, Selection, Transaction
from abbrev_engine.runtime import telemetry

from .expansion import WordBoundaryOracle, build_transaction

SEPARATOR = " "


class InvalidAbbreviationError(ValueError):
    """Raised when an abbreviation key is empty."""

    def __init__(self, abbreviation: str, expansion: str) -> None:
        super().__init__("abbreviation cannot be empty")
        self.abbreviation = abbreviation
        self.expansion = expansion


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Split ``line`` on its first space, or return ``None`` if malformed."""

    abbreviation, separator, expansion = line.rstrip("\r\n").partition(SEPARATOR)
    if not separator or not abbreviation:
        return None
    return abbreviation, expansion


class AbbreviationTable:
    """Maps abbreviations to the text they expand to.

    Lookups are exact and case-sensitive. The table is only mutated through
    ``insert``/``remove``/loading, never while a transaction is being built.
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: Dict[str, str] = {}
        for abbreviation, expansion in (entries or {}).items():
            self.insert(abbreviation, expansion)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "AbbreviationTable":
        return cls(mapping)

    @classmethod
    def load_from_source(cls, lines: Iterable[str]) -> "AbbreviationTable":
        """Build a table from ``<abbreviation> <expansion>`` lines.

        Malformed lines are skipped. If reading ``lines`` fails the result is
        an empty table; loading never raises into the editor.
        """

        table = cls()
        try:
            for number, line in enumerate(lines, start=1):
                parsed = parse_line(line)
                if parsed is None:
                    telemetry.record_event(
                        "abbreviations.skip_line",
                        level="debug",
                        data={"line": number},
                    )
                    continue
                table.insert(*parsed)
        except (OSError, UnicodeDecodeError) as exc:
            telemetry.record_event(
                "abbreviations.load_failed",
                level="warning",
                data={"error": str(exc)},
            )
            return cls()
        return table

    @classmethod
    def load_from_path(
        cls, path: str | os.PathLike[str], *, encoding: str = "utf-8"
    ) -> "AbbreviationTable":
        try:
            with open(path, encoding=encoding) as handle:
                lines = handle.readlines()
        except (OSError, UnicodeDecodeError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) else None
            telemetry.record_event(
                "abbreviations.load_failed",
                level="warning",
                data={"path": os.fspath(path), "error": reason or str(exc)},
            )
            return cls()
        table = cls.load_from_source(lines)
        telemetry.record_event(
            "abbreviations.loaded",
            data={"path": os.fspath(path), "count": len(table)},
        )
        return table

    def insert(self, abbreviation: str, expansion: str) -> None:
        if not abbreviation:
            raise InvalidAbbreviationError(abbreviation, expansion)
        self._entries[abbreviation] = expansion

    def remove(self, abbreviation: str) -> None:
        self._entries.pop(abbreviation, None)

    def lookup(self, word: str) -> Optional[str]:
        return self._entries.get(word)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbbreviationTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"AbbreviationTable({self._entries!r})"

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries.items())

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def to_lines(self) -> list[str]:
        """Render the table back into the source format, sorted by key."""

        return [
            f"{abbreviation}{SEPARATOR}{expansion}"
            for abbreviation, expansion in sorted(self._entries.items())
        ]

    def expand_or_insert(
        self,
        document: Document,
        selection: Selection,
        char: str,
        *,
        oracle: Optional[WordBoundaryOracle] = None,
    ) -> Transaction:
        return build_transaction(document, selection, self, char, oracle=oracle)


__all__ = [
    "AbbreviationTable",
    "InvalidAbbreviationError",
    "parse_line",
]

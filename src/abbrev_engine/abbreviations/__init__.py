"""Abbreviation registry and expansion transactions."""

from .expansion import (
    AbbreviationLookup,
    WordBoundaryOracle,
    build_transaction,
    expand_at,
)
from .table import AbbreviationTable, InvalidAbbreviationError, parse_line

__all__ = [
    "AbbreviationLookup",
    "AbbreviationTable",
    "InvalidAbbreviationError",
    "WordBoundaryOracle",
    "build_transaction",
    "expand_at",
    "parse_line",
]

"""Character classification used by word motions."""

from __future__ import annotations

import unicodedata
from enum import Enum

LINE_ENDINGS = frozenset("\n\u000b\u000c\r\u0085\u2028\u2029")
PUNCTUATION_CATEGORIES = frozenset(
    {"Pc", "Pd", "Pe", "Pf", "Pi", "Po", "Ps", "Sm", "Sc", "Sk"}
)


class CharCategory(str, Enum):
    WHITESPACE = "whitespace"
    EOL = "eol"
    WORD = "word"
    PUNCTUATION = "punctuation"
    UNKNOWN = "unknown"


def is_line_ending(ch: str) -> bool:
    return ch in LINE_ENDINGS


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch) in PUNCTUATION_CATEGORIES


def categorize_char(ch: str) -> CharCategory:
    if is_line_ending(ch):
        return CharCategory.EOL
    if ch.isspace():
        return CharCategory.WHITESPACE
    if is_word_char(ch):
        return CharCategory.WORD
    if is_punctuation(ch):
        return CharCategory.PUNCTUATION
    return CharCategory.UNKNOWN


def is_word_boundary(a: str, b: str) -> bool:
    return categorize_char(a) is not categorize_char(b)


def is_long_word_boundary(a: str, b: str) -> bool:
    """Like ``is_word_boundary`` but words and punctuation run together."""

    left, right = categorize_char(a), categorize_char(b)
    if {left, right} == {CharCategory.WORD, CharCategory.PUNCTUATION}:
        return False
    return left is not right


__all__ = [
    "CharCategory",
    "categorize_char",
    "is_line_ending",
    "is_long_word_boundary",
    "is_punctuation",
    "is_word_boundary",
    "is_word_char",
]

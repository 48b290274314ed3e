"""Abbreviation expansion for multi-cursor text editing."""

__all__ = [
    "abbreviations",
    "buffer",
    "config",
    "movement",
    "runtime",
]

__version__ = "0.1.0"

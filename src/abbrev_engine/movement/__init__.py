"""Character categories and word motions."""

from .chars import CharCategory, categorize_char, is_line_ending, is_word_boundary
from .words import (
    WordMotionTarget,
    move_next_long_word_start,
    move_next_word_end,
    move_next_word_start,
    move_prev_long_word_start,
    move_prev_word_end,
    move_prev_word_start,
    word_move,
)

__all__ = [
    "CharCategory",
    "WordMotionTarget",
    "categorize_char",
    "is_line_ending",
    "is_word_boundary",
    "move_next_long_word_start",
    "move_next_word_end",
    "move_next_word_start",
    "move_prev_long_word_start",
    "move_prev_word_end",
    "move_prev_word_start",
    "word_move",
]

"""Editing verbs and cursor motions built on EditEngine."""

from .editing import (
    delete_selection,
    insert_tab,
    insert_text,
    remove_next_char,
    remove_prev_char,
    replace_selection,
)
from .motion import (
    is_word_boundary,
    move_down,
    move_left,
    move_line_end,
    move_line_start,
    move_right,
    move_up,
    move_word_left,
    move_word_right,
    next_word_end,
    next_word_start,
    prev_word_end,
    prev_word_start,
    word_end,
    word_start,
)

__all__ = [
    "delete_selection",
    "insert_tab",
    "insert_text",
    "remove_next_char",
    "remove_prev_char",
    "replace_selection",
    "is_word_boundary",
    "move_down",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "move_up",
    "move_word_left",
    "move_word_right",
    "next_word_end",
    "next_word_start",
    "prev_word_end",
    "prev_word_start",
    "word_end",
    "word_start",
]

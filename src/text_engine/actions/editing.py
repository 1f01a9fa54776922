"""Editing verbs built on top of EditEngine."""

from __future__ import annotations

from typing import Optional

from text_engine.buffer import EditEngine, TextPosition, TextRange
from text_engine.buffer.range import PositionLike
from text_engine.buffer.store import InsertResult, RemoveResult
from text_engine.buffer.validation import ensure_position


def _at_cursor(engine: EditEngine, pos: Optional[PositionLike]) -> TextPosition:
    return engine.store.normalize(
        ensure_position(engine.store, pos if pos is not None else engine.cursor())
    )


def insert_tab(engine: EditEngine, pos: Optional[PositionLike] = None) -> InsertResult:
    """Insert spaces up to the next tab stop, or a tab character."""

    pos = _at_cursor(engine, pos)
    if engine.expand_tabs:
        count = engine.tab_width - pos.column % engine.tab_width
        return engine.insert_str(pos, " " * count)
    return engine.insert_char(pos, "\t")


def insert_text(engine: EditEngine, text: str) -> InsertResult:
    """Type ``text`` at the cursor, replacing any selection first."""

    if engine.has_selection():
        delete_selection(engine)
    return engine.insert_str(engine.cursor(), text)


def remove_prev_char(engine: EditEngine, pos: Optional[PositionLike] = None) -> bool:
    """Remove the grapheme before ``pos``; a line start joins the previous line."""

    pos = _at_cursor(engine, pos)
    if pos == (0, 0):
        return False
    if pos.column == 0:
        prev_line = pos.line - 1
        start = TextPosition(engine.line_width(prev_line) - 1, prev_line)
    else:
        start = TextPosition(pos.column - 1, pos.line)
    engine.remove(TextRange(start, pos))
    return True


def remove_next_char(engine: EditEngine, pos: Optional[PositionLike] = None) -> bool:
    """Remove the grapheme after ``pos``; a line break joins the next line."""

    pos = _at_cursor(engine, pos)
    width = engine.line_width(pos.line)
    if pos.column >= width:
        return False
    engine.remove(TextRange(pos, (pos.column + 1, pos.line)))
    return True


def delete_selection(engine: EditEngine) -> Optional[RemoveResult]:
    if not engine.has_selection():
        return None
    return engine.remove(engine.selection())


def replace_selection(engine: EditEngine, text: str) -> InsertResult:
    start = engine.selection().start
    delete_selection(engine)
    return engine.insert_str(start, text)


__all__ = [
    "delete_selection",
    "insert_tab",
    "insert_text",
    "remove_next_char",
    "remove_prev_char",
    "replace_selection",
]

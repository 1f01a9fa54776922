"""Cursor motions and word navigation.

Words are runs of graphemes that are not whitespace; line breaks count as
whitespace.
"""

from __future__ import annotations

from text_engine.buffer import EditEngine, TextPosition
from text_engine.buffer.grapheme import GraphemeCursor
from text_engine.buffer.range import ByteRange, PositionLike
from text_engine.buffer.validation import ensure_position


def _graphemes_at(engine: EditEngine, pos: PositionLike) -> GraphemeCursor:
    store = engine.store
    byte = store.byte_range_at(ensure_position(store, pos)).start
    return store.graphemes_byte(ByteRange(0, store.len_bytes()), byte)


def _content_width(engine: EditEngine, line: int) -> int:
    """Width of ``line`` without its line break."""

    width = engine.line_width(line)
    if line < engine.len_lines() - 1:
        return max(width - 1, 0)
    return width


def _skip_forward(cursor: GraphemeCursor, whitespace: bool) -> None:
    while True:
        item = cursor.peek_next()
        if item is None or item.is_whitespace() != whitespace:
            return
        next(cursor)


def _skip_backward(cursor: GraphemeCursor, whitespace: bool) -> None:
    while True:
        item = cursor.peek_prev()
        if item is None or item.is_whitespace() != whitespace:
            return
        cursor.prev()


def _position(engine: EditEngine, cursor: GraphemeCursor) -> TextPosition:
    return engine.store.byte_to_pos(cursor.text_offset())


def next_word_start(engine: EditEngine, pos: PositionLike) -> TextPosition:
    """Skip whitespace after ``pos``."""

    cursor = _graphemes_at(engine, pos)
    _skip_forward(cursor, whitespace=True)
    return _position(engine, cursor)


def next_word_end(engine: EditEngine, pos: PositionLike) -> TextPosition:
    """Skip whitespace, then the word after it."""

    cursor = _graphemes_at(engine, pos)
    _skip_forward(cursor, whitespace=True)
    _skip_forward(cursor, whitespace=False)
    return _position(engine, cursor)


def prev_word_start(engine: EditEngine, pos: PositionLike) -> TextPosition:
    """Skip whitespace before ``pos``, then the word before it."""

    cursor = _graphemes_at(engine, pos)
    _skip_backward(cursor, whitespace=True)
    _skip_backward(cursor, whitespace=False)
    return _position(engine, cursor)


def prev_word_end(engine: EditEngine, pos: PositionLike) -> TextPosition:
    cursor = _graphemes_at(engine, pos)
    _skip_backward(cursor, whitespace=True)
    return _position(engine, cursor)


def word_start(engine: EditEngine, pos: PositionLike) -> TextPosition:
    cursor = _graphemes_at(engine, pos)
    _skip_backward(cursor, whitespace=False)
    return _position(engine, cursor)


def word_end(engine: EditEngine, pos: PositionLike) -> TextPosition:
    cursor = _graphemes_at(engine, pos)
    _skip_forward(cursor, whitespace=False)
    return _position(engine, cursor)


def is_word_boundary(engine: EditEngine, pos: PositionLike) -> bool:
    cursor = _graphemes_at(engine, pos)
    before, after = cursor.peek_prev(), cursor.peek_next()
    if before is None or after is None:
        return False
    return before.is_whitespace() != after.is_whitespace()


def move_left(engine: EditEngine, extend_selection: bool = False) -> bool:
    cursor = _graphemes_at(engine, engine.cursor())
    if cursor.prev() is None:
        return engine.set_cursor(engine.cursor(), extend_selection)
    return engine.set_cursor(_position(engine, cursor), extend_selection)


def move_right(engine: EditEngine, extend_selection: bool = False) -> bool:
    cursor = _graphemes_at(engine, engine.cursor())
    next(cursor, None)
    return engine.set_cursor(_position(engine, cursor), extend_selection)


def move_up(engine: EditEngine, extend_selection: bool = False) -> bool:
    column, line = engine.store.normalize(engine.cursor())
    if line == 0:
        return engine.set_cursor((0, 0), extend_selection)
    target = line - 1
    return engine.set_cursor(
        (min(column, _content_width(engine, target)), target), extend_selection
    )


def move_down(engine: EditEngine, extend_selection: bool = False) -> bool:
    column, line = engine.store.normalize(engine.cursor())
    last = engine.len_lines() - 1
    if line >= last:
        return engine.set_cursor((engine.line_width(last), last), extend_selection)
    target = line + 1
    return engine.set_cursor(
        (min(column, _content_width(engine, target)), target), extend_selection
    )


def move_line_start(engine: EditEngine, extend_selection: bool = False) -> bool:
    line = engine.store.normalize(engine.cursor()).line
    return engine.set_cursor((0, line), extend_selection)


def move_line_end(engine: EditEngine, extend_selection: bool = False) -> bool:
    line = engine.store.normalize(engine.cursor()).line
    return engine.set_cursor((_content_width(engine, line), line), extend_selection)


def move_word_left(engine: EditEngine, extend_selection: bool = False) -> bool:
    return engine.set_cursor(prev_word_start(engine, engine.cursor()), extend_selection)


def move_word_right(engine: EditEngine, extend_selection: bool = False) -> bool:
    return engine.set_cursor(next_word_end(engine, engine.cursor()), extend_selection)


__all__ = [
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

from __future__ import annotations

import pytest

from text_engine.buffer import (
    ByteIndexOutOfBounds,
    ByteRange,
    ColumnIndexOutOfBounds,
    InvalidRangeError,
    RowIndexOutOfBounds,
    TextRange,
    TextString,
)


def test_byte_range_at_end_of_line_is_empty() -> None:
    store = TextString("asdfg")

    assert store.byte_range_at((5, 0)) == (5, 5)
    with pytest.raises(ColumnIndexOutOfBounds) as excinfo:
        store.byte_range_at((6, 0))
    assert excinfo.value.got == 6
    assert excinfo.value.max == 5


def test_virtual_line_only_allows_column_zero() -> None:
    store = TextString("asdfg")

    assert store.byte_range_at((0, 1)) == (5, 5)
    assert store.normalize((0, 1)) == (5, 0)
    with pytest.raises(ColumnIndexOutOfBounds):
        store.byte_range_at((1, 1))
    with pytest.raises(RowIndexOutOfBounds) as excinfo:
        store.byte_range_at((0, 2))
    assert excinfo.value.got == 2
    assert excinfo.value.max == 1


def test_multibyte_graphemes_map_to_byte_ranges() -> None:
    store = TextString("aöa")

    assert store.byte_range_at((1, 0)) == (1, 3)
    assert store.byte_to_pos(2) == (1, 0)
    assert store.byte_to_pos(3) == (2, 0)
    assert store.byte_to_pos(4) == (3, 0)
    with pytest.raises(ByteIndexOutOfBounds):
        store.byte_to_pos(5)


def test_str_slice_uses_grapheme_columns() -> None:
    store = TextString("asöfg")

    assert store.str_slice(TextRange((1, 0), (3, 0))) == "sö"
    assert store.str_slice_byte(ByteRange(1, 4)) == "sö"
    with pytest.raises(InvalidRangeError):
        store.str_slice_byte(ByteRange(1, 3))


def test_empty_store_has_one_line() -> None:
    store = TextString()

    assert store.len_lines() == 1
    assert store.has_final_newline()
    assert store.line_at(0) == ""
    assert store.line_at(1) == ""
    with pytest.raises(RowIndexOutOfBounds):
        store.line_at(2)


def test_insert_char_at_end_of_text() -> None:
    store = TextString("abcd")

    assert store.insert_char((4, 0), "X") == (TextRange((4, 0), (5, 0)), (4, 5))
    assert store.string() == "abcdX"


def test_insert_on_virtual_line_appends() -> None:
    store = TextString("1234")

    assert store.insert_char((0, 1), "5") == (TextRange((4, 0), (5, 0)), (4, 5))
    assert store.string() == "12345"


def test_insert_char_around_multibyte_text() -> None:
    store = TextString("asöfg")

    assert store.insert_char((0, 0), "X") == (TextRange((0, 0), (1, 0)), (0, 1))
    assert store.insert_char((3, 0), "X") == (TextRange((3, 0), (4, 0)), (3, 4))
    assert store.insert_char((7, 0), "X") == (TextRange((7, 0), (8, 0)), (8, 9))
    assert store.string() == "XasXöfgX"


def test_combining_mark_extends_previous_grapheme() -> None:
    store = TextString("abc")

    inserted, byte_range = store.insert_str((1, 0), "\u0301")

    assert inserted.is_empty()
    assert inserted.start == (1, 0)
    assert byte_range == (1, 3)
    assert store.line_width(0) == 3


def test_line_breaks_are_plain_graphemes() -> None:
    store = TextString("ab")

    inserted, _ = store.insert_str((1, 0), "\r\n")

    assert inserted == TextRange((1, 0), (2, 0))
    assert store.len_lines() == 1
    assert store.line_width(0) == 3


def test_remove_returns_text_and_ranges() -> None:
    store = TextString("asöfg")

    removed, (span, byte_range) = store.remove(TextRange((1, 0), (3, 0)))

    assert removed == "sö"
    assert span == TextRange((1, 0), (3, 0))
    assert byte_range == (1, 4)
    assert store.string() == "afg"


def test_min_changed_reports_and_resets() -> None:
    store = TextString("abcd")
    assert store.min_changed() is None

    store.insert_char((2, 0), "x")
    store.insert_char((3, 0), "y")

    assert store.min_changed() == 2
    assert store.min_changed() is None


def test_grapheme_cursor_walks_both_directions() -> None:
    store = TextString("aöa")
    cursor = store.graphemes_byte(ByteRange(0, 4), 1)

    item = next(cursor)
    assert item.text == "ö"
    assert item.bytes == (1, 3)
    assert cursor.text_offset() == 3
    assert cursor.prev().text == "ö"  # type: ignore[union-attr]
    assert cursor.prev().text == "a"  # type: ignore[union-attr]
    assert cursor.prev() is None


def test_lines_at_is_restartable() -> None:
    store = TextString("abc")
    lines = store.lines_at(0)

    assert list(lines) == ["abc"]
    assert list(lines) == ["abc"]
    assert len(lines) == 1

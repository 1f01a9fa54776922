"""Flat single-line text store for short inputs."""

from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidRangeError,
    RowIndexOutOfBounds,
)
from .grapheme import Grapheme, GraphemeCursor, iter_graphemes, utf8_len
from .range import ByteRange, PositionLike, TextPosition, TextRange
from .store import InsertResult, LineSequence, RemoveResult, insertion_range


class TextString:
    """Single-line store backed by a plain ``str``.

    Line breaks are ordinary characters here; the whole text is line 0 and
    line 1 is the virtual end-of-text line. Lookups are linear, which is fine
    for the short values this store is meant for.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._graphemes: List[Grapheme] = list(iter_graphemes(text))
        self._len_bytes = utf8_len(text)
        self._min_changed: Optional[int] = None

    def __repr__(self) -> str:
        return f"TextString({self._text!r})"

    def _reindex(self, changed: int) -> None:
        self._graphemes = list(iter_graphemes(self._text))
        self._len_bytes = utf8_len(self._text)
        if self._min_changed is None or changed < self._min_changed:
            self._min_changed = changed

    def string(self) -> str:
        return self._text

    def set_string(self, text: str) -> None:
        self._text = text
        self._reindex(0)

    def is_multi_line(self) -> bool:
        return False

    def has_final_newline(self) -> bool:
        return True

    def len_bytes(self) -> int:
        return self._len_bytes

    def len_chars(self) -> int:
        return len(self._text)

    def len_lines(self) -> int:
        return 1

    def min_changed(self) -> Optional[int]:
        changed, self._min_changed = self._min_changed, None
        return changed

    def _check_row(self, row: int) -> None:
        if row > 1:
            raise RowIndexOutOfBounds(row, 1)

    def line_at(self, row: int) -> str:
        self._check_row(row)
        return self._text if row == 0 else ""

    def lines_at(self, row: int) -> LineSequence:
        self._check_row(row)
        return LineSequence(self, row)

    def line_width(self, row: int) -> int:
        self._check_row(row)
        return len(self._graphemes) if row == 0 else 0

    def line_graphemes(self, row: int) -> Iterator[Grapheme]:
        self._check_row(row)
        return iter(self._graphemes if row == 0 else ())

    def graphemes_byte(self, byte_range: ByteRange, pos: int) -> GraphemeCursor:
        self._char_span(byte_range)
        if not byte_range.start <= pos <= byte_range.end:
            raise ByteIndexOutOfBounds(pos, byte_range.end)
        return GraphemeCursor(lambda _byte: (0, self._text), byte_range, pos)

    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        column, row = TextPosition.of(pos)
        self._check_row(row)
        if row == 1:
            if column != 0:
                raise ColumnIndexOutOfBounds(column, 0)
            return ByteRange(self._len_bytes, self._len_bytes)
        if column < len(self._graphemes):
            return self._graphemes[column].bytes
        if column == len(self._graphemes):
            return ByteRange(self._len_bytes, self._len_bytes)
        raise ColumnIndexOutOfBounds(column, len(self._graphemes))

    def byte_range(self, range: TextRange) -> ByteRange:
        start = self.byte_range_at(range.start)
        end = self.byte_range_at(range.end)
        return ByteRange(start.start, end.start)

    def byte_to_pos(self, byte: int) -> TextPosition:
        if byte > self._len_bytes:
            raise ByteIndexOutOfBounds(byte, self._len_bytes)
        for column, item in enumerate(self._graphemes):
            if byte < item.bytes.end:
                return TextPosition(column, 0)
        return TextPosition(len(self._graphemes), 0)

    def bytes_to_range(self, byte_range: ByteRange) -> TextRange:
        return TextRange(self.byte_to_pos(byte_range.start), self.byte_to_pos(byte_range.end))

    def str_slice(self, range: TextRange) -> str:
        return self.str_slice_byte(self.byte_range(range))

    def str_slice_byte(self, byte_range: ByteRange) -> str:
        start, end = self._char_span(byte_range)
        return self._text[start:end]

    def _char_span(self, byte_range: ByteRange) -> tuple[int, int]:
        if byte_range.start > byte_range.end:
            raise InvalidRangeError(byte_range.start, byte_range.end)
        if byte_range.end > self._len_bytes:
            raise ByteIndexOutOfBounds(byte_range.end, self._len_bytes)
        encoded = self._text.encode("utf-8")
        try:
            start = len(encoded[: byte_range.start].decode("utf-8"))
            end = start + len(encoded[byte_range.start : byte_range.end].decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise InvalidRangeError(
                byte_range.start, byte_range.end, "Byte range splits a character"
            ) from exc
        return start, end

    def normalize(self, pos: PositionLike) -> TextPosition:
        pos = TextPosition.of(pos)
        if pos.line == 1:
            return TextPosition(len(self._graphemes), 0)
        return pos

    def insert_char(self, pos: PositionLike, ch: str) -> InsertResult:
        return self.insert_str(pos, ch)

    def insert_str(self, pos: PositionLike, text: str) -> InsertResult:
        byte = self.byte_range_at(pos).start
        pos = self.normalize(pos)
        old_width = len(self._graphemes)
        start, _ = self._char_span(ByteRange(byte, byte))
        self._text = self._text[:start] + text + self._text[start:]
        self._reindex(byte)
        inserted = insertion_range(self, pos, byte, text, old_width)
        return inserted, ByteRange(byte, byte + utf8_len(text))

    def remove(self, range: TextRange) -> RemoveResult:
        byte_range = self.byte_range(range)
        start, end = self._char_span(byte_range)
        removed = self._text[start:end]
        if removed:
            self._text = self._text[:start] + self._text[end:]
            self._reindex(byte_range.start)
        return removed, (range, byte_range)


__all__ = ["TextString"]

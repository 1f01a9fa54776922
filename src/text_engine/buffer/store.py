"""The storage contract shared by the flat and rope text stores."""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Protocol, Tuple

from .grapheme import Grapheme, GraphemeCursor
from .range import ByteRange, PositionLike, TextPosition, TextRange

InsertResult = Tuple[TextRange, ByteRange]
RemoveResult = Tuple[str, Tuple[TextRange, ByteRange]]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class TextStore(Protocol):
    """Line-aware grapheme storage.

    Every store exposes one addressable, empty line after its last real line
    (``len_lines()``), so "end of document" can be written like any other
    position.
    """

    def string(self) -> str: ...

    def set_string(self, text: str) -> None: ...

    def is_multi_line(self) -> bool: ...

    def has_final_newline(self) -> bool: ...

    def len_bytes(self) -> int: ...

    def len_chars(self) -> int: ...

    def len_lines(self) -> int: ...

    def line_at(self, row: int) -> str: ...

    def lines_at(self, row: int) -> "LineSequence": ...

    def line_width(self, row: int) -> int: ...

    def line_graphemes(self, row: int) -> Iterator[Grapheme]: ...

    def graphemes_byte(self, byte_range: ByteRange, pos: int) -> GraphemeCursor: ...

    def byte_range_at(self, pos: PositionLike) -> ByteRange: ...

    def byte_range(self, range: TextRange) -> ByteRange: ...

    def byte_to_pos(self, byte: int) -> TextPosition: ...

    def bytes_to_range(self, byte_range: ByteRange) -> TextRange: ...

    def str_slice(self, range: TextRange) -> str: ...

    def str_slice_byte(self, byte_range: ByteRange) -> str: ...

    def normalize(self, pos: PositionLike) -> TextPosition: ...

    def min_changed(self) -> Optional[int]: ...

    def insert_char(self, pos: PositionLike, ch: str) -> InsertResult: ...

    def insert_str(self, pos: PositionLike, text: str) -> InsertResult: ...

    def remove(self, range: TextRange) -> RemoveResult: ...


class LineSequence:
    """Lazy, restartable view over the lines of a store starting at a row."""

    def __init__(self, store: TextStore, row: int) -> None:
        self._store = store
        self._row = row

    def __iter__(self) -> Iterator[str]:
        for row in range(self._row, self._store.len_lines()):
            yield self._store.line_at(row)

    def __len__(self) -> int:
        return max(self._store.len_lines() - self._row, 0)


def split_lines(text: str, *, final: bool = True) -> List[str]:
    """Split ``text`` after each line break, keeping the breaks.

    With ``final`` the piece after the last break is always kept, even when
    empty; that piece is the last line of a document.
    """

    lines: List[str] = []
    start = 0
    for match in _LINE_BREAK.finditer(text):
        lines.append(text[start : match.end()])
        start = match.end()
    if final or start < len(text):
        lines.append(text[start:])
    return lines


def has_break(text: str) -> bool:
    return _LINE_BREAK.search(text) is not None


def insertion_range(
    store: TextStore,
    pos: TextPosition,
    byte: int,
    text: str,
    old_width: int,
) -> TextRange:
    """Work out the grapheme range an insertion at ``pos`` now covers.

    Single-line inserts use the change in line width, which stays right when
    the new text merges with a neighbouring cluster. Inserts that add lines
    end at the position of the first byte after the new text.
    """

    if store.is_multi_line() and has_break(text):
        end = store.byte_to_pos(byte + len(text.encode("utf-8")))
        return TextRange(pos, max(end, pos))
    new_width = store.line_width(pos.line)
    column = max(pos.column + new_width - old_width, pos.column)
    return TextRange(pos, TextPosition(column, pos.line))


__all__ = [
    "InsertResult",
    "LineSequence",
    "RemoveResult",
    "TextStore",
    "has_break",
    "insertion_range",
    "split_lines",
]

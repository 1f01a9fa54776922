"""Grapheme cluster helpers built on the ``grapheme`` package."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

import grapheme as _grapheme

from .range import ByteRange

LINE_BREAKS = ("\r\n", "\n", "\r")


@dataclass(frozen=True, slots=True)
class Grapheme:
    """One user-perceived character and the bytes it occupies."""

    text: str
    bytes: ByteRange

    def is_line_break(self) -> bool:
        return self.text in LINE_BREAKS

    def is_whitespace(self) -> bool:
        return self.text.isspace()

    def __str__(self) -> str:
        return self.text


def utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def width(text: str) -> int:
    """Number of grapheme clusters in ``text``."""

    return _grapheme.length(text)


def iter_graphemes(text: str, offset: int = 0) -> Iterator[Grapheme]:
    """Yield the clusters of ``text`` with byte ranges starting at ``offset``."""

    byte = offset
    for cluster in _grapheme.graphemes(text):
        size = utf8_len(cluster)
        yield Grapheme(cluster, ByteRange(byte, byte + size))
        byte += size


ChunkLookup = Callable[[int], Tuple[int, str]]


class GraphemeCursor:
    """Bidirectional cursor over the graphemes of a byte range.

    ``next()`` yields the grapheme after the cursor and ``prev()`` the one
    before it, so iterating forward and then calling ``prev()`` walks back
    over the same clusters.

    Text is pulled one chunk at a time through ``chunk_at``, which returns
    ``(start_byte, text)`` of the chunk holding a byte offset. Chunks must
    end on cluster boundaries, as lines do. Only the chunks the cursor
    actually visits are segmented.
    """

    def __init__(self, chunk_at: ChunkLookup, byte_range: ByteRange, pos: int) -> None:
        self._chunk_at = chunk_at
        self._lo, self._hi = byte_range
        self._load(pos)
        starts = [item.bytes.start for item in self._items]
        index = bisect_right(starts, pos)
        if index and self._items[index - 1].bytes.end <= pos:
            self._index = index
        else:
            self._index = max(index - 1, 0)

    def _load(self, byte: int) -> None:
        start, text = self._chunk_at(byte)
        self._start = start
        self._end = start + utf8_len(text)
        self._items: List[Grapheme] = [
            item
            for item in iter_graphemes(text, start)
            if self._lo <= item.bytes.start and item.bytes.end <= self._hi
        ]

    def _forward(self) -> bool:
        if self._end >= self._hi:
            return False
        self._load(self._end)
        self._index = 0
        return True

    def _backward(self) -> bool:
        if self._start <= self._lo:
            return False
        self._load(self._start - 1)
        self._index = len(self._items)
        return True

    def __iter__(self) -> "GraphemeCursor":
        return self

    def __next__(self) -> Grapheme:
        item = self.peek_next()
        if item is None:
            raise StopIteration
        self._index += 1
        return item

    def prev(self) -> Optional[Grapheme]:
        item = self.peek_prev()
        if item is not None:
            self._index -= 1
        return item

    def peek_next(self) -> Optional[Grapheme]:
        while self._index >= len(self._items):
            if not self._forward():
                return None
        return self._items[self._index]

    def peek_prev(self) -> Optional[Grapheme]:
        while self._index == 0:
            if not self._backward():
                return None
        return self._items[self._index - 1]

    def text_offset(self) -> int:
        """Byte offset of the cursor."""

        if self._index < len(self._items):
            return self._items[self._index].bytes.start
        if self._items:
            return self._items[-1].bytes.end
        return min(max(self._start, self._lo), self._hi)


__all__ = [
    "Grapheme",
    "GraphemeCursor",
    "LINE_BREAKS",
    "iter_graphemes",
    "utf8_len",
    "width",
]

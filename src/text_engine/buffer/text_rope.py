"""Multi-line text store kept as a balanced tree of lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidRangeError,
    RowIndexOutOfBounds,
)
from .grapheme import Grapheme, GraphemeCursor, iter_graphemes, utf8_len, width
from .range import ByteRange, PositionLike, TextPosition, TextRange
from .store import (
    InsertResult,
    LineSequence,
    RemoveResult,
    has_break,
    insertion_range,
    split_lines,
)


@dataclass(slots=True)
class _Node:
    """Rope node. Leaves hold one line including its break; inner nodes sum."""

    left: Optional["_Node"] = None
    right: Optional["_Node"] = None
    text: str = ""
    height: int = 1
    lines: int = 1
    chars: int = 0
    nbytes: int = 0

    def is_leaf(self) -> bool:
        return self.left is None


def _leaf(text: str) -> _Node:
    return _Node(text=text, chars=len(text), nbytes=utf8_len(text))


def _h(node: Optional[_Node]) -> int:
    return node.height if node else 0


def _update(node: _Node) -> _Node:
    left, right = node.left, node.right
    assert left is not None and right is not None
    node.height = 1 + max(left.height, right.height)
    node.lines = left.lines + right.lines
    node.chars = left.chars + right.chars
    node.nbytes = left.nbytes + right.nbytes
    return node


def _bf(node: _Node) -> int:
    return _h(node.left) - _h(node.right)


def _rot_right(y: _Node) -> _Node:
    x = y.left
    assert x is not None
    y.left = x.right
    x.right = _update(y)
    return _update(x)


def _rot_left(x: _Node) -> _Node:
    y = x.right
    assert y is not None
    x.right = y.left
    y.left = _update(x)
    return _update(y)


def _rebalance(node: _Node) -> _Node:
    if node.is_leaf():
        return node
    _update(node)
    balance = _bf(node)
    if balance > 1:
        assert node.left is not None
        if _bf(node.left) < 0:
            node.left = _rot_left(node.left)
        return _rot_right(node)
    if balance < -1:
        assert node.right is not None
        if _bf(node.right) > 0:
            node.right = _rot_right(node.right)
        return _rot_left(node)
    return node


def _join(a: Optional[_Node], b: Optional[_Node]) -> Optional[_Node]:
    if a is None:
        return b
    if b is None:
        return a
    if a.height > b.height + 1:
        a.right = _join(a.right, b)
        return _rebalance(a)
    if b.height > a.height + 1:
        b.left = _join(a, b.left)
        return _rebalance(b)
    return _update(_Node(left=a, right=b))


def _split(
    node: Optional[_Node], count: int
) -> Tuple[Optional[_Node], Optional[_Node]]:
    """Split off the first ``count`` lines."""

    if node is None:
        return None, None
    if node.is_leaf():
        return (node, None) if count >= 1 else (None, node)
    assert node.left is not None
    if count < node.left.lines:
        head, tail = _split(node.left, count)
        return head, _join(tail, node.right)
    head, tail = _split(node.right, count - node.left.lines)
    return _join(node.left, head), tail


def _build(lines: List[str]) -> Optional[_Node]:
    if not lines:
        return None
    if len(lines) == 1:
        return _leaf(lines[0])
    mid = len(lines) // 2
    return _update(_Node(left=_build(lines[:mid]), right=_build(lines[mid:])))


def _leaves(node: Optional[_Node]) -> Iterator[str]:
    stack: List[_Node] = []
    while stack or node is not None:
        while node is not None and not node.is_leaf():
            stack.append(node)
            node = node.left
        if node is not None:
            yield node.text
            node = None
        if stack:
            node = stack.pop().right


class TextRope:
    """Multi-line store whose lines are the leaves of an AVL tree.

    Each node caches its line, char and byte counts, so finding a line or
    the line holding a byte walks one root-to-leaf path. Edits rewrite only
    the touched lines plus one neighbour on each side, which lets a ``\\r``
    and a following ``\\n`` merge into one break.
    """

    def __init__(self, text: str = "") -> None:
        self._root: _Node = self._build_root(text)
        self._min_changed: Optional[int] = None

    def __repr__(self) -> str:
        return f"TextRope(lines={self.len_lines()}, bytes={self.len_bytes()})"

    @staticmethod
    def _build_root(text: str) -> _Node:
        root = _build(split_lines(text))
        assert root is not None
        return root

    # -- tree access -----------------------------------------------------

    def _leaf_text(self, row: int) -> str:
        node = self._root
        while not node.is_leaf():
            assert node.left is not None and node.right is not None
            if row < node.left.lines:
                node = node.left
            else:
                row -= node.left.lines
                node = node.right
        return node.text

    def _line_start(self, row: int) -> int:
        """Byte offset of the first byte of ``row``."""

        if row >= self._root.lines:
            return self._root.nbytes
        node, offset = self._root, 0
        while not node.is_leaf():
            assert node.left is not None and node.right is not None
            if row < node.left.lines:
                node = node.left
            else:
                row -= node.left.lines
                offset += node.left.nbytes
                node = node.right
        return offset

    def _line_of_byte(self, byte: int) -> Tuple[int, int]:
        """Return ``(row, row_start_byte)`` for the line holding ``byte``."""

        node, row, offset = self._root, 0, 0
        while not node.is_leaf():
            assert node.left is not None and node.right is not None
            if byte < offset + node.left.nbytes:
                node = node.left
            else:
                row += node.left.lines
                offset += node.left.nbytes
                node = node.right
        return row, offset

    def _replace_lines(self, start: int, end: int, lines: List[str]) -> None:
        head, rest = _split(self._root, start)
        _, tail = _split(rest, end - start)
        root = _join(_join(head, _build(lines)), tail)
        assert root is not None
        self._root = root

    def _edit(self, start: int, end: int, text: str) -> None:
        first, _ = self._line_of_byte(start)
        last, _ = self._line_of_byte(end)
        first = max(first - 1, 0)
        last = min(last + 1, self._root.lines - 1)
        base = self._line_start(first)
        chunk = "".join(self._leaf_text(row) for row in range(first, last + 1))
        encoded = chunk.encode("utf-8")
        updated = (
            encoded[: start - base] + text.encode("utf-8") + encoded[end - base :]
        ).decode("utf-8")
        final = last == self._root.lines - 1
        self._replace_lines(first, last + 1, split_lines(updated, final=final))
        if self._min_changed is None or start < self._min_changed:
            self._min_changed = start

    # -- queries ---------------------------------------------------------

    def string(self) -> str:
        return "".join(_leaves(self._root))

    def set_string(self, text: str) -> None:
        self._root = self._build_root(text)
        self._min_changed = 0

    def is_multi_line(self) -> bool:
        return True

    def has_final_newline(self) -> bool:
        return True

    def len_bytes(self) -> int:
        return self._root.nbytes

    def len_chars(self) -> int:
        return self._root.chars

    def len_lines(self) -> int:
        return self._root.lines

    def min_changed(self) -> Optional[int]:
        changed, self._min_changed = self._min_changed, None
        return changed

    def _check_row(self, row: int) -> None:
        if row > self._root.lines:
            raise RowIndexOutOfBounds(row, self._root.lines)

    def line_at(self, row: int) -> str:
        self._check_row(row)
        if row == self._root.lines:
            return ""
        return self._leaf_text(row)

    def lines_at(self, row: int) -> LineSequence:
        self._check_row(row)
        return LineSequence(self, row)

    def line_width(self, row: int) -> int:
        return width(self.line_at(row))

    def line_graphemes(self, row: int) -> Iterator[Grapheme]:
        text = self.line_at(row)
        return iter_graphemes(text, self._line_start(row))

    def graphemes_byte(self, byte_range: ByteRange, pos: int) -> GraphemeCursor:
        if byte_range.start > byte_range.end:
            raise InvalidRangeError(byte_range.start, byte_range.end)
        if byte_range.end > self._root.nbytes:
            raise ByteIndexOutOfBounds(byte_range.end, self._root.nbytes)
        if not byte_range.start <= pos <= byte_range.end:
            raise ByteIndexOutOfBounds(pos, byte_range.end)
        return GraphemeCursor(self._chunk_at, byte_range, pos)

    def _chunk_at(self, byte: int) -> Tuple[int, str]:
        row, start = self._line_of_byte(byte)
        return start, self._leaf_text(row)

    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        column, row = TextPosition.of(pos)
        self._check_row(row)
        if row == self._root.lines:
            if column != 0:
                raise ColumnIndexOutOfBounds(column, 0)
            return ByteRange(self._root.nbytes, self._root.nbytes)
        count = 0
        end = self._line_start(row)
        for item in iter_graphemes(self._leaf_text(row), end):
            if count == column:
                return item.bytes
            count += 1
            end = item.bytes.end
        if column == count:
            return ByteRange(end, end)
        raise ColumnIndexOutOfBounds(column, count)

    def byte_range(self, range: TextRange) -> ByteRange:
        start = self.byte_range_at(range.start)
        end = self.byte_range_at(range.end)
        return ByteRange(start.start, end.start)

    def byte_to_pos(self, byte: int) -> TextPosition:
        if byte > self._root.nbytes:
            raise ByteIndexOutOfBounds(byte, self._root.nbytes)
        row, start = self._line_of_byte(byte)
        column = 0
        for item in iter_graphemes(self._leaf_text(row), start):
            if byte < item.bytes.end:
                break
            column += 1
        return TextPosition(column, row)

    def bytes_to_range(self, byte_range: ByteRange) -> TextRange:
        return TextRange(self.byte_to_pos(byte_range.start), self.byte_to_pos(byte_range.end))

    def str_slice(self, range: TextRange) -> str:
        return self.str_slice_byte(self.byte_range(range))

    def str_slice_byte(self, byte_range: ByteRange) -> str:
        if byte_range.start > byte_range.end:
            raise InvalidRangeError(byte_range.start, byte_range.end)
        if byte_range.end > self._root.nbytes:
            raise ByteIndexOutOfBounds(byte_range.end, self._root.nbytes)
        if byte_range.is_empty():
            return ""
        first, base = self._line_of_byte(byte_range.start)
        last, _ = self._line_of_byte(byte_range.end - 1)
        chunk = "".join(self._leaf_text(row) for row in range(first, last + 1))
        encoded = chunk.encode("utf-8")
        try:
            return encoded[byte_range.start - base : byte_range.end - base].decode(
                "utf-8"
            )
        except UnicodeDecodeError as exc:
            raise InvalidRangeError(
                byte_range.start, byte_range.end, "Byte range splits a character"
            ) from exc

    def normalize(self, pos: PositionLike) -> TextPosition:
        """Return the canonical spelling of ``pos``.

        The column after a line break is the start of the next line, and the
        virtual line is the end of the last real line.
        """

        pos = TextPosition.of(pos)
        lines = self._root.lines
        if pos.line == lines and pos.column == 0:
            return TextPosition(self.line_width(lines - 1), lines - 1)
        if pos.line < lines - 1 and pos.column > 0:
            text = self._leaf_text(pos.line)
            if pos.column == width(text) and has_break(text):
                return TextPosition(0, pos.line + 1)
        return pos

    # -- mutation --------------------------------------------------------

    def insert_char(self, pos: PositionLike, ch: str) -> InsertResult:
        return self.insert_str(pos, ch)

    def insert_str(self, pos: PositionLike, text: str) -> InsertResult:
        byte = self.byte_range_at(pos).start
        pos = self.normalize(pos)
        old_width = self.line_width(pos.line)
        if text:
            self._edit(byte, byte, text)
        inserted = insertion_range(self, pos, byte, text, old_width)
        return inserted, ByteRange(byte, byte + utf8_len(text))

    def remove(self, range: TextRange) -> RemoveResult:
        byte_range = self.byte_range(range)
        removed = self.str_slice_byte(byte_range)
        if removed:
            self._edit(byte_range.start, byte_range.end, "")
        return removed, (range, byte_range)


__all__ = ["TextRope"]

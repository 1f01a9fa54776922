"""Grapheme-aware text stores, ranges, styles and the edit engine."""

from .engine import EditEngine, Transaction
from .errors import (
    ByteIndexOutOfBounds,
    ColumnIndexOutOfBounds,
    InvalidRangeError,
    RowIndexOutOfBounds,
    TextError,
)
from .grapheme import Grapheme, GraphemeCursor
from .range import ByteRange, Ordering, TextPosition, TextRange
from .selection import SelectionModel
from .store import LineSequence, TextStore
from .style_map import StyleMap
from .sync import BufferSync, TextMirror
from .text_rope import TextRope
from .text_string import TextString
from .validation import ensure_position, ensure_range

__all__ = [
    "ByteIndexOutOfBounds",
    "ByteRange",
    "BufferSync",
    "ColumnIndexOutOfBounds",
    "EditEngine",
    "Grapheme",
    "GraphemeCursor",
    "InvalidRangeError",
    "LineSequence",
    "Ordering",
    "RowIndexOutOfBounds",
    "SelectionModel",
    "StyleMap",
    "TextError",
    "TextMirror",
    "TextPosition",
    "TextRange",
    "TextRope",
    "TextStore",
    "TextString",
    "Transaction",
    "ensure_position",
    "ensure_range",
]

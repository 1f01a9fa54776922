"""Typed errors raised by stores, ranges and the edit engine."""

from __future__ import annotations

from typing import Any


class TextError(RuntimeError):
    """Base class for every text-buffer failure."""


class ColumnIndexOutOfBounds(TextError):
    """Raised when a column lies beyond the width of its line."""

    def __init__(self, got: int, max: int) -> None:
        super().__init__(f"Column {got} out of bounds (max {max})")
        self.got = got
        self.max = max


class RowIndexOutOfBounds(TextError):
    """Raised when a line index lies beyond the virtual trailing line."""

    def __init__(self, got: int, max: int) -> None:
        super().__init__(f"Row {got} out of bounds (max {max})")
        self.got = got
        self.max = max


class ByteIndexOutOfBounds(TextError):
    """Raised when a byte offset lies beyond the end of the text."""

    def __init__(self, got: int, max: int) -> None:
        super().__init__(f"Byte {got} out of bounds (max {max})")
        self.got = got
        self.max = max


class InvalidRangeError(TextError):
    """Raised for ranges whose start lies after their end, or that split a character."""

    def __init__(self, start: Any, end: Any, message: str | None = None) -> None:
        super().__init__(message or f"Invalid range {start!r} > {end!r}")
        self.start = start
        self.end = end


__all__ = [
    "TextError",
    "ColumnIndexOutOfBounds",
    "RowIndexOutOfBounds",
    "ByteIndexOutOfBounds",
    "InvalidRangeError",
]

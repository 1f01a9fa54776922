"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .errors import InvalidRangeError
from .range import ByteRange, PositionLike, TextPosition, TextRange
from .store import TextStore


def ensure_position(store: TextStore, pos: PositionLike) -> TextPosition:
    pos = TextPosition.of(pos)
    if pos.column < 0 or pos.line < 0:
        raise InvalidRangeError(pos, pos, f"Negative position {pos!r}")
    store.byte_range_at(pos)
    return pos


def ensure_range(store: TextStore, range: TextRange) -> ByteRange:
    """Check both ends of ``range`` and return the bytes it covers."""

    ensure_position(store, range.start)
    ensure_position(store, range.end)
    return store.byte_range(range)


__all__ = ["ensure_position", "ensure_range"]

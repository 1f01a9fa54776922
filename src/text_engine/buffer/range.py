"""Grapheme positions, byte ranges and text ranges with edit propagation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple, Union

from .errors import InvalidRangeError


class TextPosition(NamedTuple):
    """A ``(column, line)`` grapheme position.

    Positions order by ``(line, column)`` even though the tuple stores the
    column first, so ``TextPosition(5, 0) < TextPosition(0, 1)``. Equality and
    hashing stay tuple based, which lets plain ``(column, line)`` tuples be
    used anywhere a position is expected.
    """

    column: int
    line: int

    @classmethod
    def of(cls, value: "PositionLike") -> "TextPosition":
        if isinstance(value, TextPosition):
            return value
        column, line = value
        return cls(int(column), int(line))

    def _key(self) -> Tuple[int, int]:
        return (self.line, self.column)

    def __lt__(self, other: object) -> bool:  # type: ignore[override]
        return self._key() < _swap(other)

    def __le__(self, other: object) -> bool:  # type: ignore[override]
        return self._key() <= _swap(other)

    def __gt__(self, other: object) -> bool:  # type: ignore[override]
        return self._key() > _swap(other)

    def __ge__(self, other: object) -> bool:  # type: ignore[override]
        return self._key() >= _swap(other)

    def __repr__(self) -> str:
        return f"({self.column}|{self.line})"


PositionLike = Union[TextPosition, Tuple[int, int]]


def _swap(value: object) -> Tuple[int, int]:
    column, line = value  # type: ignore[misc]
    return (line, column)


class ByteRange(NamedTuple):
    """Half-open ``[start, end)`` interval of UTF-8 byte offsets."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, byte: int) -> bool:
        return self.start <= byte < self.end


class Ordering(Enum):
    """Where a position lies relative to a range."""

    BEFORE = "before"
    WITHIN = "within"
    AFTER = "after"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Ordered pair of positions spanning some text.

    ``start <= end`` always holds; a reversed pair is rejected with
    ``InvalidRangeError``.
    """

    start: TextPosition
    end: TextPosition

    def __post_init__(self) -> None:
        start = TextPosition.of(self.start)
        end = TextPosition.of(self.end)
        if start > end:
            raise InvalidRangeError(start, end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def empty(cls, pos: PositionLike) -> "TextRange":
        return cls(pos, pos)  # type: ignore[arg-type]

    @classmethod
    def ordered(cls, a: PositionLike, b: PositionLike) -> "TextRange":
        """Build a range from two positions given in any order."""

        a, b = TextPosition.of(a), TextPosition.of(b)
        return cls(a, b) if a <= b else cls(b, a)

    @property
    def line_delta(self) -> int:
        return self.end.line - self.start.line

    def is_empty(self) -> bool:
        return self.start == self.end

    def ordering(self, pos: PositionLike) -> Ordering:
        """Place ``pos`` relative to this range; the end counts as after."""

        pos = TextPosition.of(pos)
        if pos < self.start:
            return Ordering.BEFORE
        if pos < self.end:
            return Ordering.WITHIN
        return Ordering.AFTER

    def ordering_inclusive(self, pos: PositionLike) -> Ordering:
        """Place ``pos`` relative to this range; the end counts as within."""

        pos = TextPosition.of(pos)
        if pos < self.start:
            return Ordering.BEFORE
        if pos <= self.end:
            return Ordering.WITHIN
        return Ordering.AFTER

    def contains_pos(self, pos: PositionLike) -> bool:
        return self.ordering(pos) is Ordering.WITHIN

    def before_pos(self, pos: PositionLike) -> bool:
        """True if the whole range lies before ``pos``."""

        return self.end <= TextPosition.of(pos)

    def after_pos(self, pos: PositionLike) -> bool:
        """True if the whole range lies after ``pos``."""

        return self.start > TextPosition.of(pos)

    def contains(self, other: "TextRange") -> bool:
        return (
            self.ordering(other.start) is Ordering.WITHIN
            and self.ordering_inclusive(other.end) is Ordering.WITHIN
        )

    def intersects(self, other: "TextRange") -> bool:
        return other.start < self.end and other.end > self.start

    def expand_pos(self, pos: PositionLike) -> TextPosition:
        """Map ``pos`` across an insertion that grew from ``start`` to ``end``."""

        pos = TextPosition.of(pos)
        if pos < self.start:
            return pos
        if pos == self.start:
            return self.end
        delta = self.line_delta
        if pos.line > self.start.line:
            return TextPosition(pos.column, pos.line + delta)
        if pos.column >= self.start.column:
            return TextPosition(
                pos.column - self.start.column + self.end.column, pos.line + delta
            )
        return pos

    def shrink_pos(self, pos: PositionLike) -> TextPosition:
        """Map ``pos`` across a removal that collapsed ``start..end``."""

        pos = TextPosition.of(pos)
        placement = self.ordering_inclusive(pos)
        if placement is Ordering.BEFORE:
            return pos
        if placement is Ordering.WITHIN:
            return self.start
        delta = self.line_delta
        if pos.line > self.end.line:
            return TextPosition(pos.column, pos.line - delta)
        if pos.column >= self.end.column:
            return TextPosition(
                pos.column - self.end.column + self.start.column, pos.line - delta
            )
        return pos

    def expand(self, other: "TextRange") -> "TextRange":
        return TextRange(self.expand_pos(other.start), self.expand_pos(other.end))

    def shrink(self, other: "TextRange") -> "TextRange":
        return TextRange(self.shrink_pos(other.start), self.shrink_pos(other.end))

    def __repr__(self) -> str:
        return f"TextRange({self.start!r}-{self.end!r})"


__all__ = [
    "ByteRange",
    "Ordering",
    "PositionLike",
    "TextPosition",
    "TextRange",
]

"""Cursor and anchor tracking for an edit engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from .range import PositionLike, TextPosition, TextRange
from .store import TextStore


@dataclass(slots=True)
class SelectionModel:
    """Cursor + anchor over a store; ``cursor == anchor`` means no selection."""

    store: TextStore
    cursor: TextPosition = field(default=TextPosition(0, 0))
    anchor: TextPosition = field(default=TextPosition(0, 0))

    def clamp(self, pos: PositionLike) -> TextPosition:
        column, line = TextPosition.of(pos)
        line = max(min(line, self.store.len_lines() - 1), 0)
        column = max(min(column, self.store.line_width(line)), 0)
        return TextPosition(column, line)

    def set_cursor(self, pos: PositionLike, extend_selection: bool = False) -> bool:
        """Move the cursor, clamped to the text; returns True if anything moved."""

        old_cursor, old_anchor = self.cursor, self.anchor
        self.cursor = self.clamp(pos)
        if not extend_selection:
            self.anchor = self.cursor
        return old_cursor != self.cursor or old_anchor != self.anchor

    def has_selection(self) -> bool:
        return self.cursor != self.anchor

    def selection(self) -> TextRange:
        return TextRange.ordered(self.anchor, self.cursor)

    def set_selection(self, range: TextRange) -> bool:
        old = self.selection()
        self.set_cursor(range.start, False)
        self.set_cursor(range.end, True)
        return old != self.selection()

    def select_all(self) -> bool:
        old = self.selection()
        last = self.store.len_lines() - 1
        self.set_cursor((0, 0), False)
        self.set_cursor((self.store.line_width(last), last), True)
        return old != self.selection()

    def clear_selection(self) -> bool:
        return self.set_cursor(self.cursor, False)

    def reset(self) -> None:
        self.cursor = TextPosition(0, 0)
        self.anchor = TextPosition(0, 0)

    def expand(self, inserted: TextRange) -> None:
        self.cursor = inserted.expand_pos(self.cursor)
        self.anchor = inserted.expand_pos(self.anchor)

    def shrink(self, removed: TextRange) -> None:
        self.cursor = removed.shrink_pos(self.cursor)
        self.anchor = removed.shrink_pos(self.anchor)


__all__ = ["SelectionModel"]

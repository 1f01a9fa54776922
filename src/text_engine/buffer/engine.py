"""Edit engine combining a text store, style map and selection."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, ContextManager, Dict, List, Optional, Sequence

from text_engine.runtime import telemetry

from .grapheme import LINE_BREAKS
from .range import ByteRange, PositionLike, TextPosition, TextRange
from .selection import SelectionModel
from .store import InsertResult, LineSequence, RemoveResult, TextStore
from .style_map import StyleEntry, StyleMap
from .sync import TextMirror
from .text_rope import TextRope
from .text_string import TextString
from .validation import ensure_position, ensure_range


class EditEngine:
    """Owns one store and keeps cursor, anchor and styles in step with it.

    Every mutation checks its positions against the store first and raises
    the same typed errors as the queries, so a failed call leaves text,
    selection and styles untouched.
    """

    def __init__(
        self,
        store: Optional[TextStore] = None,
        *,
        name: str = "default",
        newline: str = "\n",
        tab_width: int = 8,
        expand_tabs: bool = True,
    ) -> None:
        self.name = name
        self.store: TextStore = store if store is not None else TextRope()
        self.style_map = StyleMap()
        self.selection_model = SelectionModel(self.store)
        self.newline = newline
        self.tab_width = tab_width
        self.expand_tabs = expand_tabs

    @classmethod
    def from_text(
        cls, text: str, *, multi_line: bool = True, name: str = "default"
    ) -> "EditEngine":
        store: TextStore = TextRope(text) if multi_line else TextString(text)
        return cls(store, name=name)

    def __repr__(self) -> str:
        return f"EditEngine(name={self.name!r}, store={self.store!r})"

    # -- configuration ---------------------------------------------------

    def set_newline(self, newline: str) -> None:
        """Line break used by ``insert_newline``; no conversion of existing text."""

        if newline not in LINE_BREAKS:
            raise ValueError(f"Unsupported line break {newline!r}")
        self.newline = newline

    def set_tab_width(self, tab_width: int) -> None:
        if tab_width < 1:
            raise ValueError("Tab width must be positive")
        self.tab_width = tab_width

    def set_expand_tabs(self, expand_tabs: bool) -> None:
        self.expand_tabs = expand_tabs

    # -- value -----------------------------------------------------------

    def text(self) -> str:
        return self.store.string()

    def is_empty(self) -> bool:
        return self.store.len_bytes() == 0

    def set_value(self, text: str) -> None:
        """Replace the whole text; resets cursor, anchor and styles."""

        self.store.set_string(text)
        self.selection_model.reset()
        self.style_map.clear_styles()
        telemetry.record_event(
            "buffer.set_value",
            level="debug",
            data={"buffer": self.name, "bytes": self.store.len_bytes()},
        )

    def clear(self) -> bool:
        if self.is_empty():
            return False
        self.set_value("")
        return True

    # -- queries ---------------------------------------------------------

    def len_lines(self) -> int:
        return self.store.len_lines()

    def line_width(self, row: int) -> int:
        return self.store.line_width(row)

    def line_at(self, row: int) -> str:
        return self.store.line_at(row)

    def lines_at(self, row: int) -> LineSequence:
        return self.store.lines_at(row)

    def str_slice(self, range: TextRange) -> str:
        return self.store.str_slice(range)

    def byte_range_at(self, pos: PositionLike) -> ByteRange:
        return self.store.byte_range_at(pos)

    def byte_range(self, range: TextRange) -> ByteRange:
        return self.store.byte_range(range)

    def byte_to_pos(self, byte: int) -> TextPosition:
        return self.store.byte_to_pos(byte)

    def bytes_to_range(self, byte_range: ByteRange) -> TextRange:
        return self.store.bytes_to_range(byte_range)

    # -- cursor and selection --------------------------------------------

    def cursor(self) -> TextPosition:
        return self.selection_model.cursor

    def anchor(self) -> TextPosition:
        return self.selection_model.anchor

    def set_cursor(self, pos: PositionLike, extend_selection: bool = False) -> bool:
        return self.selection_model.set_cursor(pos, extend_selection)

    def has_selection(self) -> bool:
        return self.selection_model.has_selection()

    def selection(self) -> TextRange:
        return self.selection_model.selection()

    def set_selection(self, range: TextRange) -> bool:
        return self.selection_model.set_selection(range)

    def select_all(self) -> bool:
        return self.selection_model.select_all()

    def clear_selection(self) -> bool:
        return self.selection_model.clear_selection()

    def selected_text(self) -> str:
        return self.store.str_slice(self.selection())

    # -- styles ----------------------------------------------------------

    def add_style(self, range: TextRange, style: int) -> bool:
        ensure_range(self.store, range)
        canonical = TextRange(
            self.store.normalize(range.start), self.store.normalize(range.end)
        )
        added = self.style_map.add_style(canonical, style)
        if added:
            telemetry.record_event(
                "buffer.add_style",
                level="debug",
                data={"buffer": self.name, "range": canonical, "style": style},
            )
        return added

    def remove_style(self, range: TextRange, style: int) -> bool:
        canonical = TextRange(
            self.store.normalize(range.start), self.store.normalize(range.end)
        )
        return self.style_map.remove_style(canonical, style)

    def styles_at(self, pos: PositionLike) -> List[int]:
        pos = ensure_position(self.store, pos)
        return self.style_map.styles_at(self.store.normalize(pos))

    def styles(self) -> Sequence[StyleEntry]:
        return self.style_map.styles()

    def clear_styles(self) -> None:
        self.style_map.clear_styles()

    # -- mutation --------------------------------------------------------

    def insert_char(self, pos: PositionLike, ch: str) -> InsertResult:
        """Insert one character; line breaks go through ``insert_newline``."""

        if len(ch) != 1:
            raise ValueError(f"Expected a single character, got {ch!r}")
        if ch in ("\n", "\r"):
            return self.insert_newline(pos)
        pos = ensure_position(self.store, pos)
        with Transaction(self, "insert_char", pos=pos) as tx:
            self._normalize_selection()
            inserted = self.store.insert_char(pos, ch)
            self._expand(inserted[0])
            tx.commit(*inserted)
        return inserted

    def insert_newline(self, pos: PositionLike) -> InsertResult:
        pos = ensure_position(self.store, pos)
        with Transaction(self, "insert_newline", pos=pos) as tx:
            self._normalize_selection()
            inserted = self.store.insert_str(pos, self.newline)
            self._expand(inserted[0])
            tx.commit(*inserted)
        return inserted

    def insert_str(self, pos: PositionLike, text: str) -> InsertResult:
        """Insert ``text`` as one edit with one propagation step."""

        pos = ensure_position(self.store, pos)
        if not text:
            byte = self.store.byte_range_at(pos).start
            return TextRange.empty(pos), ByteRange(byte, byte)
        with Transaction(self, "insert_str", pos=pos, chars=len(text)) as tx:
            self._normalize_selection()
            inserted = self.store.insert_str(pos, text)
            self._expand(inserted[0])
            tx.commit(*inserted)
        return inserted

    def remove(self, range: TextRange) -> RemoveResult:
        """Delete ``range``.

        Styles lying wholly inside the range are dropped, the others are
        shifted but never cut. When the range ends at the start of the line
        after ``range.start``, the reported range ends at the matching column
        on the start line instead.
        """

        byte_range = ensure_range(self.store, range)
        if byte_range.is_empty():
            return "", (range, byte_range)

        start = self.store.normalize(range.start)
        end = self.store.normalize(range.end)
        removed_range = TextRange(start, end)
        reported = removed_range
        if end == (0, start.line + 1):
            reported = TextRange(start, (self.store.line_width(start.line), start.line))

        with Transaction(self, "remove", range=removed_range) as tx:
            self._normalize_selection()
            lines = self.store.len_lines() - removed_range.line_delta
            removed, (_, byte_range) = self.store.remove(removed_range)
            dropped = self.style_map.drop_contained(removed_range)
            self.style_map.shrink(removed_range)
            self.selection_model.shrink(removed_range)
            if self.store.len_lines() < lines:
                self._join_break(start.line)
            tx.add_metadata("dropped_styles", dropped)
            tx.commit(reported, byte_range)
        return removed, (reported, byte_range)

    def _normalize_selection(self) -> None:
        model = self.selection_model
        model.cursor = self.store.normalize(model.cursor)
        model.anchor = self.store.normalize(model.anchor)

    def _expand(self, inserted: TextRange) -> None:
        self.style_map.expand(inserted)
        self.selection_model.expand(inserted)

    def _join_break(self, line: int) -> None:
        """Lift positions after a removal that fused a \\r and a \\n into one break.

        Shrinking left the \\n alone on ``line``; it now ends line ``line - 1``.
        """

        column = self.store.line_width(line - 1) - 1

        def lift(pos: TextPosition) -> TextPosition:
            if pos.line < line:
                return pos
            if pos.line > line:
                return TextPosition(pos.column, pos.line - 1)
            if pos.column == 0:
                return TextPosition(column, line - 1)
            return TextPosition(0, line)

        self.style_map.styles_after_mut((0, line)).remap(
            lambda span: TextRange(lift(span.start), lift(span.end))
        )
        model = self.selection_model
        model.cursor = lift(model.cursor)
        model.anchor = lift(model.anchor)

    # -- host sync -------------------------------------------------------

    def mirror(self, *, attributes: Optional[Dict[str, str]] = None) -> TextMirror:
        return TextMirror(
            text=self.text(),
            cursor=self.cursor(),
            anchor=self.anchor(),
            selection=self.selection(),
            styles=tuple(self.style_map.styles()),
            attributes=dict(attributes or {}),
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one engine mutation."""

    def __init__(self, engine: EditEngine, label: str, **metadata: Any) -> None:
        self.engine = engine
        self.label = label
        self.metadata = metadata
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.engine.name, **self.metadata},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def add_metadata(self, key: str, value: Any) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def commit(self, range: TextRange, byte_range: ByteRange) -> None:
        self.add_metadata("range", range)
        self.add_metadata("bytes", byte_range)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["EditEngine", "Transaction"]

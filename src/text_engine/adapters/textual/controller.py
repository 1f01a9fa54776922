"""Textual adapter that turns key events into EditEngine edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from text_engine import actions
from text_engine.buffer import EditEngine, TextError, TextMirror


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualEditHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[TextMirror], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


KeyHandler = Callable[[EditEngine], object]


def _motion(fn: Callable[[EditEngine, bool], bool], extend: bool) -> KeyHandler:
    return lambda engine: fn(engine, extend)


def _enter(engine: EditEngine) -> object:
    if engine.has_selection():
        actions.delete_selection(engine)
    return engine.insert_newline(engine.cursor())


def _tab(engine: EditEngine) -> object:
    if engine.has_selection():
        actions.delete_selection(engine)
    return actions.insert_tab(engine)


def _backspace(engine: EditEngine) -> object:
    if engine.has_selection():
        return actions.delete_selection(engine)
    return actions.remove_prev_char(engine)


def _delete(engine: EditEngine) -> object:
    if engine.has_selection():
        return actions.delete_selection(engine)
    return actions.remove_next_char(engine)


def default_key_table() -> Dict[str, KeyHandler]:
    table: Dict[str, KeyHandler] = {
        "enter": _enter,
        "tab": _tab,
        "backspace": _backspace,
        "delete": _delete,
        "ctrl+a": lambda engine: engine.select_all(),
    }
    motions = {
        "left": actions.move_left,
        "right": actions.move_right,
        "up": actions.move_up,
        "down": actions.move_down,
        "home": actions.move_line_start,
        "end": actions.move_line_end,
        "ctrl+left": actions.move_word_left,
        "ctrl+right": actions.move_word_right,
    }
    for key, fn in motions.items():
        table[key] = _motion(fn, False)
        table[f"shift+{key}"] = _motion(fn, True)
    return table


class TextualEditAdapter:
    """Bridges Textual key events to an EditEngine and back to widgets."""

    def __init__(
        self,
        engine: EditEngine,
        hooks: TextualEditHooks,
        *,
        keys: Optional[Dict[str, KeyHandler]] = None,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self.keys = keys if keys is not None else default_key_table()
        self._refresh_buffer()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Apply one key; returns True if the key was consumed."""

        self._log_state("key ->", key=key, text=text)
        handler = self.keys.get(key.lower())
        try:
            if handler is not None:
                handler(self.engine)
            elif text and text.isprintable():
                actions.insert_text(self.engine, text)
            else:
                self._log_state("ignored <-", key=key)
                return False
        except TextError as exc:
            self.hooks.update_status(f"error::{exc}")
            self._log_state("error <-", key=key, error=exc)
            return True
        self._refresh_buffer()
        self._log_state("result <-", key=key)
        return True

    def pull_buffer(self) -> TextMirror:
        return self.engine.mirror(attributes={"buffer": self.engine.name})

    def push_host_edit(self, text: str) -> None:
        actions.insert_text(self.engine, text)
        self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())
        cursor = self.engine.cursor()
        self.hooks.update_status(f"{cursor.line + 1}:{cursor.column + 1}")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "cursor": self.engine.cursor(),
            "anchor": self.engine.anchor(),
            "lines": self.engine.len_lines(),
            "buffer": self.engine.name,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextualEditAdapter", "TextualEditHooks", "default_key_table"]

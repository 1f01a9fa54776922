"""Executable Textual app that hosts an EditEngine."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from text_engine.buffer import EditEngine, TextMirror
from text_engine.buffer.grapheme import iter_graphemes
from text_engine.buffer.store import split_lines

from .controller import TextualEditAdapter, TextualEditHooks


def render_mirror(mirror: TextMirror) -> str:
    """Plain-text view of the mirror with the cursor marked by ``|``."""

    column, line = mirror.cursor
    rows = []
    for index, row in enumerate(split_lines(mirror.text)):
        clusters = [item.text for item in iter_graphemes(row) if not item.is_line_break()]
        if index == line:
            clusters.insert(min(column, len(clusters)), "|")
        rows.append("".join(clusters))
    return "\n".join(rows)


class TextEngineApp(App[None]):
    """Minimal Textual UI around the text engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", name: str = "scratch") -> None:
        super().__init__()
        self.engine = EditEngine.from_text(text, name=name)
        self.adapter: TextualEditAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualEditHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.adapter = TextualEditAdapter(self.engine, hooks)

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None or event.key == "ctrl+q":
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()

    def _update_buffer(self, mirror: TextMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the text engine Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        default=os.environ.get("TEXT_ENGINE_DEMO_FILE"),
        help="Optional file whose contents seed the buffer",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = ""
    name = "scratch"
    if args.path:
        path = Path(args.path)
        text = path.read_text(encoding="utf-8")
        name = path.name
    TextEngineApp(text=text, name=name).run()


if __name__ == "__main__":  # pragma: no cover
    main()

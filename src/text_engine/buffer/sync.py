"""Adapter boundary types for syncing engines with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .range import TextPosition, TextRange
from .style_map import StyleEntry


@dataclass(slots=True)
class TextMirror:
    """Host-friendly snapshot describing the current engine state."""

    text: str
    cursor: TextPosition
    anchor: TextPosition
    selection: TextRange
    styles: tuple[StyleEntry, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def has_selection(self) -> bool:
        return self.cursor != self.anchor


class BufferSync(Protocol):
    """Protocol describing how adapters exchange data with an engine."""

    def pull_buffer(self) -> TextMirror:
        """Return the latest snapshot that the host should render."""
        ...

    def push_host_edit(self, text: str) -> None:
        """Submit text from the host (IME commit, paste) at the cursor."""
        ...


__all__ = ["BufferSync", "TextMirror"]

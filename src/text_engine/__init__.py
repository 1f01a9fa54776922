"""Grapheme-aware text buffer engine for text-entry widgets."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "runtime",
]

__version__ = "0.1.0"

"""Textual adapter for the text engine."""

from .controller import TextualEditAdapter, TextualEditHooks, default_key_table

__all__ = ["TextualEditAdapter", "TextualEditHooks", "default_key_table"]

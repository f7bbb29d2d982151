"""Textual host adapter: controller is importable without the app."""

from .controller import (
    ABOUT_TEXT,
    CLOSE_WARNING,
    TextualEditorAdapter,
    TextualEditorHooks,
)

__all__ = ["ABOUT_TEXT", "CLOSE_WARNING", "TextualEditorAdapter", "TextualEditorHooks"]

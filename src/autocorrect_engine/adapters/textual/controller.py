"""Adapter that renders an EditorSession for Textual and relays key presses."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from rich.text import Text

from autocorrect_engine import __version__
from autocorrect_engine.editor import EditorFileError, EditorSession

CURSOR_STYLE = "reverse"
SELECTION_STYLE = "on blue"
ABOUT_TEXT = (
    f"autocorrect-engine {__version__}: capitalizes sentences and underlines "
    "words missing a space after a period."
)
CLOSE_WARNING = "You are going to exit!"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualEditorHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[Text], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges an EditorSession to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualEditorHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._key_actions: Dict[str, Callable[[], None]] = {
            "left": lambda: session.move_cursor(-1),
            "right": lambda: session.move_cursor(1),
            "up": lambda: session.move_line(-1),
            "down": lambda: session.move_line(1),
            "home": session.line_home,
            "end": session.line_end,
            "shift+left": lambda: session.extend_selection(-1),
            "shift+right": lambda: session.extend_selection(1),
            "backspace": session.backspace,
            "delete": session.delete,
            "enter": lambda: session.insert("\n"),
        }
        self.refresh()

    def handle_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Apply a Textual key press; returns ``False`` when it was not ours."""

        action = self._key_actions.get(key)
        if action is not None:
            action()
        elif character and len(character) == 1 and character.isprintable():
            self.session.insert(character)
        else:
            return False
        self.hooks.log(f"key -> {key!r} cursor={self.session.cursor}")
        self.refresh()
        return True

    # --- menu actions -------------------------------------------------------
    def new(self) -> None:
        self.session.new()
        self.refresh("New document")

    def open(self, path: str | Path) -> bool:
        return self._file_action(lambda: self.session.open(path), "Opened")

    def save(self) -> bool:
        """Save to the current path; ``False`` means the host must ask for one."""

        if self.session.current_path is None:
            self.hooks.update_status("Save As: enter a file name")
            return False
        return self._file_action(self.session.save, "File saved successfully.")

    def save_as(self, base: str) -> bool:
        return self._file_action(
            lambda: self.session.save_as(base), "File saved successfully."
        )

    def undo(self) -> None:
        self.refresh(None if self.session.undo() else "Nothing to undo")

    def redo(self) -> None:
        self.refresh(None if self.session.redo() else "Nothing to redo")

    def cut(self) -> None:
        self.refresh(None if self.session.cut() else "Nothing selected")

    def copy(self) -> None:
        self.refresh("Copied" if self.session.copy() else "Nothing selected")

    def paste(self) -> None:
        self.refresh(None if self.session.paste() else "Clipboard is empty")

    def select_all(self) -> None:
        self.refresh(None if self.session.select_all() else "Nothing to select")

    def delete_all(self) -> None:
        self.refresh("Deleted all" if self.session.delete_all() else "Nothing to delete")

    def about(self) -> None:
        self.hooks.update_status(ABOUT_TEXT)

    def close(self) -> str:
        """Warn that the editor is exiting; the host quits afterwards."""

        self.hooks.log("close requested")
        self.hooks.update_status(CLOSE_WARNING)
        return CLOSE_WARNING

    # --- rendering ----------------------------------------------------------
    def render(self) -> Text:
        """Document text with the underline overlay, selection and cursor."""

        session = self.session
        document = session.document
        selection = sorted(session.selection) if session.selection else None
        lines = []
        for block in document.blocks():
            line = Text(block.text)
            for run in document.format_ranges(block.index):
                line.stylize(
                    run.underline.rich_style(),
                    run.start - block.start,
                    run.end - block.start,
                )
            if selection:
                lo = max(selection[0], block.start) - block.start
                hi = min(selection[1], block.end) - block.start
                if lo < hi:
                    line.stylize(SELECTION_STYLE, lo, hi)
            if block.start <= session.cursor <= block.end:
                column = session.cursor - block.start
                if column == len(block.text):
                    line.append(" ", style=CURSOR_STYLE)
                else:
                    line.stylize(CURSOR_STYLE, column, column + 1)
            lines.append(line)
        return Text("\n").join(lines)

    def status_line(self) -> str:
        block, column = self.session.document.block_at(self.session.cursor)
        path = self.session.current_path
        name = path.name if path else "untitled"
        return f"{name} | Ln {block.index + 1}, Col {column + 1}"

    def refresh(self, message: Optional[str] = None) -> None:
        self.hooks.update_document(self.render())
        status = self.status_line()
        self.hooks.update_status(f"{status} | {message}" if message else status)

    def _file_action(self, action: Callable[[], object], success: str) -> bool:
        try:
            action()
        except EditorFileError as exc:
            self.hooks.log(f"file error -> {exc}")
            self.hooks.update_status(str(exc))
            return False
        self.refresh(success)
        return True


__all__ = ["ABOUT_TEXT", "CLOSE_WARNING", "TextualEditorAdapter", "TextualEditorHooks"]

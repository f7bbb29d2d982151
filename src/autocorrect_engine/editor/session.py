"""UI-agnostic editor session: file handling, cursor, clipboard and undo."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from autocorrect_engine.autocorrect import AutoCorrectConfig, AutoCorrectEngine
from autocorrect_engine.document import TextDocument, ensure_range
from autocorrect_engine.runtime import telemetry

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class EditorFileError(RuntimeError):
    """Raised when a file cannot be opened or saved."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def timestamped_name(base: str, now: Optional[datetime] = None) -> str:
    """Return ``<base>_<YYYYMMDD_HHMMSS>`` for save-as targets."""

    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"{base}_{stamp}"


class EditorSession:
    """One open document plus the editing state a host view needs.

    The session attaches an :class:`AutoCorrectEngine` to its document, so
    every edit made through it is corrected before control returns.
    """

    def __init__(
        self,
        *,
        document: Optional[TextDocument] = None,
        engine: Optional[AutoCorrectEngine] = None,
    ) -> None:
        self.document = document or TextDocument()
        self.engine = engine or AutoCorrectEngine(AutoCorrectConfig.from_env())
        self.engine.attach(self.document)
        self.current_path: Optional[Path] = None
        self.cursor = 0
        self.selection: Optional[Tuple[int, int]] = None
        self.clipboard = ""
        self.logger = telemetry.get_logger("autocorrect_engine.editor")

    # --- files --------------------------------------------------------------
    def new(self) -> None:
        self.document.set_text("")
        self.current_path = None
        self._reset_cursor()
        self.logger.debug("new document")

    def open(self, path: str | Path) -> None:
        target = Path(path)
        try:
            text = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise EditorFileError(
                f"File could not be opened: {exc}", path=target
            ) from exc
        self.document.set_text(text)
        self.current_path = target
        self._reset_cursor()
        telemetry.record_event(
            "editor.open",
            data={"path": str(target), "blocks": self.document.block_count},
            logger_name="autocorrect_engine.editor",
        )

    def save(self) -> Path:
        if self.current_path is None:
            raise EditorFileError("No file name yet; use Save As.")
        self._write(self.current_path)
        return self.current_path

    def save_as(self, base: str | Path, *, now: Optional[datetime] = None) -> Path:
        if not str(base).strip():
            raise EditorFileError("Save As operation canceled.")
        target = Path(timestamped_name(str(base), now))
        self._write(target)
        self.current_path = target
        return target

    def _write(self, target: Path) -> None:
        try:
            target.write_text(self.document.text, encoding="utf-8")
        except OSError as exc:
            raise EditorFileError(f"Cannot save file: {exc}", path=target) from exc
        telemetry.record_event(
            "editor.save",
            data={"path": str(target), "characters": self.document.character_count},
            logger_name="autocorrect_engine.editor",
        )

    # --- cursor & selection -------------------------------------------------
    def move_to(self, offset: int) -> None:
        self.cursor = max(0, min(offset, self.document.character_count))
        self.selection = None

    def move_cursor(self, delta: int) -> None:
        self.move_to(self.cursor + delta)

    def move_line(self, delta: int) -> None:
        """Move to the same column of the block ``delta`` lines away."""

        block, column = self.document.block_at(self.cursor)
        index = max(0, min(block.index + delta, self.document.block_count - 1))
        target = self.document.block(index)
        self.move_to(target.start + min(column, len(target.text)))

    def line_home(self) -> None:
        block, _ = self.document.block_at(self.cursor)
        self.move_to(block.start)

    def line_end(self) -> None:
        block, _ = self.document.block_at(self.cursor)
        self.move_to(block.end)

    def select(self, start: int, end: int) -> None:
        ensure_range(self.document.character_count, min(start, end), max(start, end))
        self.selection = (start, end)
        self.cursor = end

    def select_all(self) -> bool:
        count = self.document.character_count
        if not count:
            return False
        self.select(0, count)
        return True

    def extend_selection(self, delta: int) -> None:
        anchor = self.selection[0] if self.selection else self.cursor
        end = max(0, min(self.cursor + delta, self.document.character_count))
        self.select(anchor, end)

    @property
    def selected_text(self) -> str:
        if not self.selection:
            return ""
        start, end = sorted(self.selection)
        return self.document.text[start:end]

    # --- editing ------------------------------------------------------------
    def insert(self, text: str) -> None:
        start, end = self._edit_span()
        self.document.replace_range(start, end, text)
        self.move_to(start + len(text))

    def backspace(self) -> None:
        if self.selection:
            self._delete_selection()
        elif self.cursor > 0:
            self.document.replace_range(self.cursor - 1, self.cursor, "")
            self.move_to(self.cursor - 1)

    def delete(self) -> None:
        if self.selection:
            self._delete_selection()
        elif self.cursor < self.document.character_count:
            self.document.replace_range(self.cursor, self.cursor + 1, "")

    def delete_all(self) -> bool:
        """Clear the content as one undoable edit, keeping ``current_path``."""

        count = self.document.character_count
        if not count:
            return False
        self.document.replace_range(0, count, "")
        self._reset_cursor()
        return True

    def copy(self) -> bool:
        text = self.selected_text
        if not text:
            return False
        self.clipboard = text
        return True

    def cut(self) -> bool:
        if not self.copy():
            return False
        self._delete_selection()
        return True

    def paste(self) -> bool:
        if not self.clipboard:
            return False
        self.insert(self.clipboard)
        return True

    def undo(self) -> bool:
        changed = self.document.undo()
        self.move_to(self.cursor)
        return changed

    def redo(self) -> bool:
        changed = self.document.redo()
        self.move_to(self.cursor)
        return changed

    def _edit_span(self) -> Tuple[int, int]:
        if self.selection:
            start, end = sorted(self.selection)
            return start, end
        return self.cursor, self.cursor

    def _delete_selection(self) -> None:
        start, end = self._edit_span()
        self.document.replace_range(start, end, "")
        self.move_to(start)

    def _reset_cursor(self) -> None:
        self.cursor = 0
        self.selection = None


__all__ = ["EditorFileError", "EditorSession", "timestamped_name"]

"""Executable Textual app hosting an auto-correcting editor session."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use autocorrect_engine.adapters.textual.app"
    ) from exc

from autocorrect_engine.editor import EditorSession
from autocorrect_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualEditorHooks


class AutoCorrectEditorApp(App[None]):
    """Minimal Textual editor whose document is auto-corrected on every edit."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#path-input {
		display: none;
	}

	#path-input.prompting {
		display: block;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+w", "close", "Close", priority=True),
        Binding("ctrl+n", "new", "New", priority=True),
        Binding("ctrl+o", "open", "Open", priority=True),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("f2", "save_as", "Save As", priority=True),
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+x", "cut", "Cut", priority=True),
        Binding("ctrl+c", "copy", "Copy", priority=True),
        Binding("ctrl+v", "paste", "Paste", priority=True),
        Binding("ctrl+a", "select_all", "Select All", priority=True),
        Binding("ctrl+d", "delete_all", "Delete All", priority=True),
        Binding("f1", "about", "About", priority=True),
    ]

    def __init__(self, *, path: Optional[str] = None) -> None:
        super().__init__()
        self.adapter: TextualEditorAdapter | None = None
        self._initial_path = path
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None
        self._path_input: Input | None = None
        self._path_action: str | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="document-area"):
            self._document_widget = Static("", id="document-view")
            yield self._document_widget
        self._path_input = Input(placeholder="File name", id="path-input")
        yield self._path_input
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualEditorHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(EditorSession(), hooks)
        if self._initial_path:
            self.adapter.open(self._initial_path)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or self._path_action is not None:
            return
        if self.adapter.handle_key(event.key, character=event.character):
            event.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        action, self._path_action = self._path_action, None
        value = event.value
        event.input.value = ""
        event.input.remove_class("prompting")
        if not self.adapter or action is None:
            return
        if action == "open":
            self.adapter.open(value)
        else:
            self.adapter.save_as(value)

    # --- actions ------------------------------------------------------------
    def action_new(self) -> None:
        if self.adapter:
            self.adapter.new()

    def action_open(self) -> None:
        self._prompt_path("open")

    def action_save(self) -> None:
        if self.adapter and not self.adapter.save():
            self._prompt_path("save_as")

    def action_save_as(self) -> None:
        self._prompt_path("save_as")

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.redo()

    def action_cut(self) -> None:
        if self.adapter:
            self.adapter.cut()

    def action_copy(self) -> None:
        if self.adapter:
            self.adapter.copy()

    def action_paste(self) -> None:
        if self.adapter:
            self.adapter.paste()

    def action_select_all(self) -> None:
        if self.adapter:
            self.adapter.select_all()

    def action_delete_all(self) -> None:
        if self.adapter:
            self.adapter.delete_all()

    def action_about(self) -> None:
        if self.adapter:
            self.adapter.about()

    def action_close(self) -> None:
        warning = self.adapter.close() if self.adapter else None
        self.exit(message=warning)

    # --- hooks --------------------------------------------------------------
    def _prompt_path(self, action: str) -> None:
        if not self._path_input:
            return
        self._path_action = action
        self._path_input.add_class("prompting")
        self._path_input.focus()
        if action == "open":
            self._update_status("Open: enter a file name")
        else:
            self._update_status("Save As: enter a base name")

    def _update_document(self, text: Text) -> None:
        if self._document_widget:
            self._document_widget.update(text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("autocorrect_engine.textual").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the auto-correcting Textual editor."
    )
    parser.add_argument("path", nargs="?", help="File to open on start-up")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=telemetry.env("LOG_PRESET", "quiet"),
        help="telelog preset (default: quiet, console output would draw over the UI)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    AutoCorrectEditorApp(path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()

"""Auto-correct engine that reacts to document changes."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from autocorrect_engine.document import TextDocument
from autocorrect_engine.runtime import telemetry

from .config import AutoCorrectConfig
from .edits import TextEdit
from .scanner import plan_corrections


class AutoCorrectEngine:
    """Capitalizes sentences and flags words glued to a preceding period.

    Attach the engine to a document to run a full pass after every change.
    A pass edits the very document that notified it, so the engine's own
    handler is disconnected while the pass runs and reconnected afterwards,
    whatever way the pass exits.
    """

    def __init__(self, config: Optional[AutoCorrectConfig] = None) -> None:
        self.config = config or AutoCorrectConfig()
        self.logger = telemetry.get_logger("autocorrect_engine.autocorrect")

    def attach(self, document: TextDocument) -> None:
        document.changed.connect(self._on_document_changed)
        self.logger.debug("autocorrect attached")

    def detach(self, document: TextDocument) -> None:
        if document.changed.disconnect(self._on_document_changed):
            self.logger.debug("autocorrect detached")

    def is_attached(self, document: TextDocument) -> bool:
        return document.changed.is_connected(self._on_document_changed)

    @contextmanager
    def suppressed(self, document: TextDocument) -> Iterator[None]:
        """Keep this engine from hearing ``document``'s notifications."""

        with document.changed.blocked(self._on_document_changed):
            yield

    def run(self, document: TextDocument) -> None:
        with self.suppressed(document):
            with telemetry.span(
                "autocorrect::pass",
                component="autocorrect",
                metadata={"blocks": document.block_count, "version": document.version},
                logger_name="autocorrect_engine.autocorrect",
            ):
                flag = self.config.flag_format
                edits = plan_corrections(document.blocks(), flag=flag)
                version = document.version
                with document.edit_block("autocorrect", merge=self.config.merge_undo):
                    for edit in edits:
                        edit.apply(document)
                changed = document.version != version
                text_edits = sum(1 for edit in edits if isinstance(edit, TextEdit))

        telemetry.record_event(
            "autocorrect.pass",
            level="debug",
            data={
                "text_edits": text_edits,
                "format_edits": len(edits) - text_edits,
                "changed": changed,
                "version": document.version,
            },
            logger_name="autocorrect_engine.autocorrect",
        )

    def _on_document_changed(self, payload: object) -> None:
        if isinstance(payload, TextDocument):
            self.run(payload)


__all__ = ["AutoCorrectEngine"]

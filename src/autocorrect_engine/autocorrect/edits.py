"""Offset-addressed edits produced by the auto-correct scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from autocorrect_engine.document import CharFormat, TextDocument


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Same-length replacement of the characters starting at ``offset``."""

    offset: int
    text: str

    def apply(self, document: TextDocument) -> None:
        document.replace_text(self.offset, self.text)


@dataclass(frozen=True, slots=True)
class FormatEdit:
    """Set (or, with ``underline=None``, clear) the underline over ``[start, end)``."""

    start: int
    end: int
    underline: CharFormat = None

    @property
    def clears(self) -> bool:
        return self.underline is None

    def apply(self, document: TextDocument) -> None:
        document.set_underline(self.start, self.end, self.underline)


Edit = Union[TextEdit, FormatEdit]

__all__ = ["Edit", "FormatEdit", "TextEdit"]

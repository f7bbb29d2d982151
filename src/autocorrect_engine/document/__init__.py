"""Document model: line blocks, underline formatting, change signal and undo."""

from .document import DocumentSnapshot, LineBlock, TextDocument, normalize_newlines
from .formats import CharFormat, FormatRange, UnderlineFormat, UnderlineStyle
from .signals import ChangeCallback, ChangeSignal
from .undo import UndoEntry, UndoTimeline
from .validation import DocumentRangeError, ensure_offset, ensure_range

__all__ = [
    "CharFormat",
    "ChangeCallback",
    "ChangeSignal",
    "DocumentRangeError",
    "DocumentSnapshot",
    "FormatRange",
    "LineBlock",
    "TextDocument",
    "UnderlineFormat",
    "UnderlineStyle",
    "UndoEntry",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
    "normalize_newlines",
]

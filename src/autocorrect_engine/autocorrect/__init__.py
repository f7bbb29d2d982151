"""Auto-correct pass: scanner, edit types and the change-driven engine."""

from .config import AutoCorrectConfig
from .edits import Edit, FormatEdit, TextEdit
from .engine import AutoCorrectEngine
from .scanner import DEFAULT_FLAG, plan_corrections, uppercase, word_after

__all__ = [
    "AutoCorrectConfig",
    "AutoCorrectEngine",
    "DEFAULT_FLAG",
    "Edit",
    "FormatEdit",
    "TextEdit",
    "plan_corrections",
    "uppercase",
    "word_after",
]

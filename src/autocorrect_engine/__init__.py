"""Auto-correcting text document engine with a Textual editor host."""

__all__ = [
    "adapters",
    "autocorrect",
    "document",
    "editor",
    "runtime",
]

__version__ = "0.1.0"

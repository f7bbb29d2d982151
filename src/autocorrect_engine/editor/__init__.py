"""Editor shell services independent of any UI toolkit."""

from .session import EditorFileError, EditorSession, timestamped_name

__all__ = ["EditorFileError", "EditorSession", "timestamped_name"]

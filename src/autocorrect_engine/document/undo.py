"""Undo/redo history of document snapshots."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .document import DocumentSnapshot


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    before: "DocumentSnapshot"
    after: "DocumentSnapshot"


class UndoTimeline:
    """Linear undo/redo history; pushing after an undo discards the redo tail."""

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        if self._index < len(self._entries) - 1:
            self._entries = self._entries[: self._index + 1]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def amend_head(self, after: "DocumentSnapshot") -> bool:
        """Extend the newest entry so it ends at ``after``.

        Only possible when that entry is the current position (nothing to
        redo); returns ``False`` otherwise.
        """

        if self._index < 0 or self.can_redo():
            return False
        self._entries[self._index] = replace(self._entries[self._index], after=after)
        return True

    def head(self) -> Optional[UndoEntry]:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]

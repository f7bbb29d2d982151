"""Block-structured text document with per-character underline formatting."""

from __future__ import annotations

from bisect import bisect_right
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from autocorrect_engine.runtime import telemetry

from .formats import CharFormat, FormatRange, blank_marks, coalesce, inherit_marks
from .signals import ChangeSignal
from .undo import UndoEntry, UndoTimeline
from .validation import DocumentRangeError, ensure_offset, ensure_range

NEWLINE = "\n"


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", NEWLINE).replace("\r", NEWLINE)


@dataclass(frozen=True, slots=True)
class LineBlock:
    """One line of the document as it existed when the block was read."""

    index: int
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    lines: Tuple[str, ...]
    marks: Tuple[Tuple[CharFormat, ...], ...]

    @property
    def text(self) -> str:
        return NEWLINE.join(self.lines)


@dataclass(slots=True)
class _PendingBlock:
    label: str
    merge: bool
    before: DocumentSnapshot


class TextDocument:
    """Ordered line blocks addressed by absolute character offsets.

    Offsets count every character of every block plus one for each newline
    separating two blocks, so ``block(i + 1).start == block(i).end + 1``.

    Mutations are grouped with :meth:`edit_block`. When the outermost group
    closes and the content (text or formatting) actually differs, the version
    is bumped, one undo entry is recorded and :attr:`changed` is emitted once
    with the document as payload. Mutations made outside any group form a
    group of their own.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self._lines: List[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]
        self._marks: List[List[CharFormat]] = [
            blank_marks(len(line)) for line in self._lines
        ]
        self.version = 0
        self.changed = ChangeSignal()
        self.undo_stack = UndoTimeline()
        self._depth = 0
        self._pending: Optional[_PendingBlock] = None
        # Block start offsets; rebuilt lazily whenever line lengths change.
        self._starts: Optional[List[int]] = None

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(normalize_newlines(text).split(NEWLINE))

    # --- reading ------------------------------------------------------------
    @property
    def text(self) -> str:
        return NEWLINE.join(self._lines)

    @property
    def character_count(self) -> int:
        return self._offsets()[-1] + len(self._lines[-1])

    @property
    def block_count(self) -> int:
        return len(self._lines)

    def blocks(self) -> Iterator[LineBlock]:
        start = 0
        for index, line in enumerate(self._lines):
            yield LineBlock(index=index, text=line, start=start)
            start += len(line) + 1

    def block(self, index: int) -> LineBlock:
        if index < 0 or index >= len(self._lines):
            raise IndexError(f"Block index {index} out of range")
        start = self._offsets()[index]
        return LineBlock(index=index, text=self._lines[index], start=start)

    def block_at(self, offset: int) -> Tuple[LineBlock, int]:
        """Return the block containing ``offset`` and the column inside it.

        An offset sitting on a newline belongs to the block it terminates.
        """

        ensure_offset(self.character_count, offset)
        starts = self._offsets()
        index = bisect_right(starts, offset) - 1
        start = starts[index]
        return LineBlock(index=index, text=self._lines[index], start=start), offset - start

    def underline_at(self, offset: int) -> CharFormat:
        block, column = self.block_at(offset)
        if column >= len(block.text):
            return None
        return self._marks[block.index][column]

    def format_ranges(self, block_index: Optional[int] = None) -> List[FormatRange]:
        """Underlined runs of one block, or of the whole document."""

        if block_index is not None:
            block = self.block(block_index)
            return coalesce(self._marks[block.index], base=block.start)
        ranges: List[FormatRange] = []
        for block in self.blocks():
            ranges.extend(coalesce(self._marks[block.index], base=block.start))
        return ranges

    def snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(
            lines=tuple(self._lines),
            marks=tuple(tuple(marks) for marks in self._marks),
        )

    # --- editing ------------------------------------------------------------
    @contextmanager
    def edit_block(
        self, label: str = "edit", *, merge: bool = False
    ) -> Iterator["TextDocument"]:
        """Group mutations into one version bump, undo entry and notification.

        ``merge=True`` folds the group into the newest undo entry instead of
        recording a new one, provided nothing is waiting to be redone.
        """

        outermost = self._depth == 0
        if outermost:
            self._pending = _PendingBlock(
                label=label, merge=merge, before=self.snapshot()
            )
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            if outermost:
                pending, self._pending = self._pending, None
                assert pending is not None
                self._commit(pending)

    def replace_text(self, offset: int, text: str) -> None:
        """Overwrite ``len(text)`` characters of one block starting at ``offset``."""

        if NEWLINE in text:
            raise DocumentRangeError(
                "Replacement may not contain newlines", offset=offset
            )
        block, column = self.block_at(offset)
        if column + len(text) > len(block.text):
            raise DocumentRangeError("Replacement crosses block end", offset=offset)
        with self.edit_block("replace_text"):
            line = self._lines[block.index]
            self._lines[block.index] = line[:column] + text + line[column + len(text):]

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` with ``text``; may add or drop blocks."""

        start, end = ensure_range(self.character_count, start, end)
        with self.edit_block("replace_range"):
            flat_text = self.text
            flat_marks = self._flat_marks()
            inherited = list(inherit_marks(flat_marks, start, len(text)))
            self._load_flat(
                flat_text[:start] + text + flat_text[end:],
                flat_marks[:start] + inherited + flat_marks[end:],
            )

    def set_underline(self, start: int, end: int, underline: CharFormat) -> None:
        """Apply ``underline`` (or clear it with ``None``) over ``[start, end)``."""

        start, end = ensure_range(self.character_count, start, end)
        if start == end:
            return
        starts = self._offsets()
        first = bisect_right(starts, start) - 1
        last = bisect_right(starts, end - 1) - 1
        with self.edit_block("set_underline"):
            for index in range(first, last + 1):
                block_start = starts[index]
                lo = max(start, block_start) - block_start
                hi = min(end, block_start + len(self._lines[index])) - block_start
                marks = self._marks[index]
                for column in range(lo, hi):
                    marks[column] = underline

    def set_text(self, text: str) -> None:
        """Replace the whole content, drop formatting and forget undo history."""

        with self.edit_block("set_text"):
            self._load_flat(normalize_newlines(text), None)
        self.undo_stack.clear()

    def undo(self) -> bool:
        entry = self.undo_stack.undo()
        if entry is None:
            return False
        self._restore(entry.before, action="undo", label=entry.label)
        return True

    def redo(self) -> bool:
        entry = self.undo_stack.redo()
        if entry is None:
            return False
        self._restore(entry.after, action="redo", label=entry.label)
        return True

    # --- internals ----------------------------------------------------------
    def _offsets(self) -> List[int]:
        if self._starts is None:
            starts: List[int] = []
            start = 0
            for line in self._lines:
                starts.append(start)
                start += len(line) + 1
            self._starts = starts
        return self._starts

    def _flat_marks(self) -> List[CharFormat]:
        flat: List[CharFormat] = []
        for index, marks in enumerate(self._marks):
            if index:
                flat.append(None)  # newline
            flat.extend(marks)
        return flat

    def _load_flat(self, text: str, marks: Optional[Sequence[CharFormat]]) -> None:
        lines = text.split(NEWLINE)
        block_marks: List[List[CharFormat]] = []
        cursor = 0
        for line in lines:
            if marks is None:
                block_marks.append(blank_marks(len(line)))
            else:
                block_marks.append(list(marks[cursor:cursor + len(line)]))
            cursor += len(line) + 1
        self._lines = lines
        self._marks = block_marks
        self._starts = None

    def _restore(self, snapshot: DocumentSnapshot, *, action: str, label: str) -> None:
        self._lines = list(snapshot.lines)
        self._marks = [list(marks) for marks in snapshot.marks]
        self._starts = None
        self.version += 1
        telemetry.record_event(
            f"document.{action}",
            level="debug",
            data={"label": label, "version": self.version},
            logger_name="autocorrect_engine.document",
        )
        self.changed.emit(self)

    def _commit(self, pending: _PendingBlock) -> None:
        after = self.snapshot()
        if after == pending.before:
            return
        self.version += 1
        if pending.merge:
            amended = self.undo_stack.amend_head(after)
            if not amended and self.undo_stack.head() is not None:
                self.undo_stack.push(UndoEntry(pending.label, pending.before, after))
        else:
            self.undo_stack.push(UndoEntry(pending.label, pending.before, after))
        self.changed.emit(self)


__all__ = ["DocumentSnapshot", "LineBlock", "TextDocument", "normalize_newlines"]

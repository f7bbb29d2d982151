"""Validation helpers shared across document services."""

from __future__ import annotations

from typing import Tuple


class DocumentRangeError(ValueError):
    """Raised when an edit addresses characters outside the document."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise DocumentRangeError("Offset out of range", offset=offset)
    return offset


def ensure_range(length: int, start: int, end: int) -> Tuple[int, int]:
    ensure_offset(length, start)
    ensure_offset(length, end)
    if end < start:
        raise DocumentRangeError("Range end precedes start", offset=end)
    return start, end

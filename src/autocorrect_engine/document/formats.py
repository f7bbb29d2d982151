"""Character formatting attributes carried by document blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence


class UnderlineStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True, slots=True)
class UnderlineFormat:
    """Underline attribute applied to a character; absence means no underline."""

    color: str = "red"
    style: UnderlineStyle = UnderlineStyle.SINGLE

    def rich_style(self) -> str:
        """Return the equivalent ``rich`` style string."""

        if self.style is UnderlineStyle.DOUBLE:
            return f"underline2 {self.color}"
        return f"underline {self.color}"


CharFormat = Optional[UnderlineFormat]


@dataclass(frozen=True, slots=True)
class FormatRange:
    """Coalesced run of characters sharing one underline format.

    ``start``/``end`` are absolute document offsets, ``end`` exclusive.
    """

    start: int
    end: int
    underline: UnderlineFormat

    @property
    def length(self) -> int:
        return self.end - self.start


def coalesce(marks: Sequence[CharFormat], *, base: int = 0) -> List[FormatRange]:
    """Collapse per-character marks into runs, skipping unformatted characters."""

    ranges: List[FormatRange] = []
    run_start = 0
    current: CharFormat = None
    for index, mark in enumerate(list(marks) + [None]):
        if mark == current:
            continue
        if current is not None:
            ranges.append(FormatRange(base + run_start, base + index, current))
        current = mark
        run_start = index
    return ranges


def blank_marks(length: int) -> List[CharFormat]:
    return [None] * length


def inherit_marks(
    marks: Sequence[CharFormat], at: int, count: int
) -> Iterable[CharFormat]:
    """Marks for ``count`` characters inserted at ``at``: copy the preceding one."""

    inherited = marks[at - 1] if 0 < at <= len(marks) else None
    return [inherited] * count


__all__ = [
    "CharFormat",
    "FormatRange",
    "UnderlineFormat",
    "UnderlineStyle",
    "blank_marks",
    "coalesce",
    "inherit_marks",
]

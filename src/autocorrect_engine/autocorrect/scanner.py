"""Single-pass sentence scanner that plans casing and underline edits.

The scanner never touches a document: it reads line blocks and returns the
ordered edits a pass should apply. Casing edits never change length, so every
offset stays valid while the edits are applied in order.
"""

from __future__ import annotations

from typing import Iterable, List, MutableSequence, Tuple

from autocorrect_engine.document import LineBlock, UnderlineFormat

from .edits import Edit, FormatEdit, TextEdit

PERIOD = "."
SPACE = " "

DEFAULT_FLAG = UnderlineFormat()


def plan_corrections(
    blocks: Iterable[LineBlock], *, flag: UnderlineFormat = DEFAULT_FLAG
) -> List[Edit]:
    """Return the edits that capitalize sentences and flag unspaced words.

    ``capitalize_next`` starts out set and is carried from block to block, so a
    period ending one line capitalizes the first letter of the next non-empty
    line.
    """

    edits: List[Edit] = []
    capitalize_next = True
    for block in blocks:
        capitalize_next = _plan_block(block, capitalize_next, flag, edits)
    return edits


def word_after(text: str, index: int) -> Tuple[int, int]:
    """Span of the letter run found after skipping spaces from ``index``."""

    start = index
    while start < len(text) and text[start] == SPACE:
        start += 1
    end = start
    while end < len(text) and text[end].isalpha():
        end += 1
    return start, end


def uppercase(char: str) -> str:
    # "ß".upper() is "SS"; keep such characters so lengths never change.
    upper = char.upper()
    return upper if len(upper) == len(char) else char


def _plan_block(
    block: LineBlock,
    capitalize_next: bool,
    flag: UnderlineFormat,
    edits: List[Edit],
) -> bool:
    if not block.text:
        return capitalize_next

    chars = list(block.text)
    if chars[0].isalpha() and chars[0].islower():
        _capitalize(chars, 0, block, edits)

    # Underlines are recomputed from scratch: clear the block, then let the
    # scan's own decisions land on top.
    edits.append(FormatEdit(block.start, block.end, None))

    text = block.text
    for index, char in enumerate(chars):
        if char == PERIOD:
            capitalize_next = True
            if index + 1 < len(text):
                start, end = word_after(text, index + 1)
                if start < end:
                    underline = None if text[index + 1] == SPACE else flag
                    edits.append(
                        FormatEdit(block.start + start, block.start + end, underline)
                    )
        elif char == SPACE and capitalize_next:
            continue
        elif char.isalpha() and capitalize_next:
            _capitalize(chars, index, block, edits)
            capitalize_next = False

    return capitalize_next


def _capitalize(
    chars: MutableSequence[str], index: int, block: LineBlock, edits: List[Edit]
) -> None:
    upper = uppercase(chars[index])
    if upper == chars[index]:
        return
    chars[index] = upper
    edits.append(TextEdit(block.start + index, upper))


__all__ = ["DEFAULT_FLAG", "plan_corrections", "uppercase", "word_after"]

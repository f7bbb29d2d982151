from __future__ import annotations

from typing import List

import pytest

from autocorrect_engine.document import (
    ChangeSignal,
    DocumentRangeError,
    FormatRange,
    TextDocument,
    UnderlineFormat,
)

RED = UnderlineFormat()


def record_changes(document: TextDocument) -> List[int]:
    versions: List[int] = []
    document.changed.connect(lambda payload: versions.append(payload.version))
    return versions


def test_blocks_carry_absolute_offsets() -> None:
    document = TextDocument.from_text("ab\n\ncde")

    blocks = list(document.blocks())

    assert [block.text for block in blocks] == ["ab", "", "cde"]
    assert [block.start for block in blocks] == [0, 3, 4]
    assert blocks[2].end == 7
    assert document.character_count == 7
    assert document.block(2) == blocks[2]


def test_from_text_normalizes_line_endings() -> None:
    document = TextDocument.from_text("one\r\ntwo\n")

    assert document.text == "one\ntwo\n"
    assert document.block_count == 3


def test_block_at_maps_newline_to_terminated_block() -> None:
    document = TextDocument.from_text("ab\ncd")

    block, column = document.block_at(2)
    assert (block.index, column) == (0, 2)
    block, column = document.block_at(3)
    assert (block.index, column) == (1, 0)


def test_replace_text_keeps_length_and_formats() -> None:
    document = TextDocument.from_text("hello")
    document.set_underline(0, 5, RED)

    document.replace_text(0, "H")

    assert document.text == "Hello"
    assert document.format_ranges(0) == [FormatRange(0, 5, RED)]


def test_replace_text_rejects_crossing_block_end() -> None:
    document = TextDocument.from_text("ab\ncd")

    with pytest.raises(DocumentRangeError):
        document.replace_text(1, "XY")
    with pytest.raises(DocumentRangeError):
        document.replace_text(0, "a\n")


def test_replace_range_splits_blocks_and_shifts_formats() -> None:
    document = TextDocument.from_text("abcd")
    document.set_underline(2, 4, RED)

    document.replace_range(1, 1, "x\ny")

    assert document.text == "ax\nybcd"
    assert document.format_ranges(0) == []
    assert document.format_ranges(1) == [FormatRange(5, 7, RED)]


def test_replace_range_inherits_preceding_underline() -> None:
    document = TextDocument.from_text("abcd")
    document.set_underline(0, 2, RED)

    document.replace_range(1, 1, "z")

    assert document.text == "azbcd"
    assert document.format_ranges() == [FormatRange(0, 3, RED)]


def test_set_underline_skips_newlines_and_validates() -> None:
    document = TextDocument.from_text("ab\ncd")

    document.set_underline(1, 4, RED)

    assert document.format_ranges() == [FormatRange(1, 2, RED), FormatRange(3, 4, RED)]
    assert document.underline_at(2) is None
    with pytest.raises(DocumentRangeError):
        document.set_underline(3, 9, RED)


def test_edit_block_emits_once_and_records_one_undo_entry() -> None:
    document = TextDocument.from_text("abc")
    versions = record_changes(document)

    with document.edit_block("batch"):
        document.replace_text(0, "A")
        document.set_underline(1, 3, RED)

    assert versions == [1]
    assert len(document.undo_stack) == 1
    assert document.undo_stack.head().label == "batch"


def test_edit_block_without_net_change_is_silent() -> None:
    document = TextDocument.from_text("abc")
    versions = record_changes(document)

    with document.edit_block():
        document.set_underline(0, 3, RED)
        document.set_underline(0, 3, None)
        document.replace_text(0, "a")

    assert versions == []
    assert document.version == 0
    assert len(document.undo_stack) == 0


def test_merge_folds_into_head_entry() -> None:
    document = TextDocument.from_text("abc")
    document.replace_range(3, 3, "d")

    with document.edit_block("follow-up", merge=True):
        document.replace_text(0, "A")

    assert len(document.undo_stack) == 1
    assert document.undo()
    assert document.text == "abc"
    assert document.redo()
    assert document.text == "Abcd"


def test_merge_without_history_is_not_recorded() -> None:
    document = TextDocument.from_text("abc")

    with document.edit_block("follow-up", merge=True):
        document.replace_text(0, "A")

    assert document.text == "Abc"
    assert not document.undo_stack.can_undo()


def test_undo_restores_formatting_and_notifies() -> None:
    document = TextDocument.from_text("abc")
    document.set_underline(0, 3, RED)
    versions = record_changes(document)

    assert document.undo()

    assert document.format_ranges() == []
    assert versions == [document.version]
    assert not document.undo()


def test_set_text_clears_history_and_formats() -> None:
    document = TextDocument.from_text("abc")
    document.set_underline(0, 3, RED)

    document.set_text("x\ny")

    assert document.text == "x\ny"
    assert document.format_ranges() == []
    assert not document.undo_stack.can_undo()


def test_change_signal_blocked_restores_only_connected_callbacks() -> None:
    signal = ChangeSignal()
    calls: List[object] = []

    def listener(payload: object) -> None:
        calls.append(payload)

    signal.connect(listener)
    with pytest.raises(RuntimeError):
        with signal.blocked(listener):
            signal.emit("inside")
            raise RuntimeError("boom")
    signal.emit("after")

    other = ChangeSignal()
    with other.blocked(listener):
        pass

    assert calls == ["after"]
    assert signal.is_connected(listener)
    assert not other.is_connected(listener)


def test_set_text_normalizes_line_endings_like_from_text() -> None:
    document = TextDocument()

    document.set_text("one\rtwo\r\nthree")

    assert document.text == "one\ntwo\nthree"
    assert document.text == TextDocument.from_text("one\rtwo\r\nthree").text
    assert document.block_count == 3


def test_offsets_follow_line_length_changes() -> None:
    document = TextDocument.from_text("ab\ncd\nef")
    assert document.block(2).start == 6

    document.replace_range(0, 0, "xyz\n")
    assert [block.start for block in document.blocks()] == [0, 4, 7, 10]
    assert document.block(3).start == 10
    assert document.character_count == 12

    document.undo()
    assert document.block(2).start == 6
    block, column = document.block_at(7)
    assert (block.index, column) == (2, 1)


def test_set_underline_across_blocks_only_marks_covered_characters() -> None:
    document = TextDocument.from_text("abc\ndef\nghi")

    document.set_underline(2, 9, RED)

    assert document.format_ranges() == [
        FormatRange(2, 3, RED),
        FormatRange(4, 7, RED),
        FormatRange(8, 9, RED),
    ]


def test_offset_lookups_on_large_document() -> None:
    lines = [f"line {index}" for index in range(5000)]
    document = TextDocument(lines)
    expected = 0
    for index, line in enumerate(lines):
        if index in (0, 2500, 4999):
            assert document.block(index).start == expected
            block, column = document.block_at(expected + 2)
            assert (block.index, column) == (index, 2)
        expected += len(line) + 1

    assert document.character_count == expected - 1
    document.set_underline(expected - 4, expected - 1, RED)
    assert document.format_ranges() == [FormatRange(expected - 4, expected - 1, RED)]

from __future__ import annotations

from typing import List

from autocorrect_engine.autocorrect import (
    DEFAULT_FLAG,
    Edit,
    FormatEdit,
    TextEdit,
    plan_corrections,
    uppercase,
    word_after,
)
from autocorrect_engine.document import TextDocument


def plan(text: str) -> List[Edit]:
    return plan_corrections(TextDocument.from_text(text).blocks())


def text_edits(edits: List[Edit]) -> List[TextEdit]:
    return [edit for edit in edits if isinstance(edit, TextEdit)]


def test_spaced_sentence_plans_capitals_and_clear() -> None:
    assert plan("hello. world") == [
        TextEdit(0, "H"),
        FormatEdit(0, 12, None),
        FormatEdit(7, 12, None),
        TextEdit(7, "W"),
    ]


def test_missing_space_plans_underline_over_word() -> None:
    assert plan("Hello.world") == [
        FormatEdit(0, 11, None),
        FormatEdit(6, 11, DEFAULT_FLAG),
        TextEdit(6, "W"),
    ]


def test_block_clear_precedes_word_decisions() -> None:
    edits = plan("a.b.c")
    formats = [edit for edit in edits if isinstance(edit, FormatEdit)]

    assert formats[0] == FormatEdit(0, 5, None)
    assert formats[1:] == [FormatEdit(2, 3, DEFAULT_FLAG), FormatEdit(4, 5, DEFAULT_FLAG)]


def test_consecutive_periods_only_flag_the_letter_run() -> None:
    edits = plan("a..b")

    assert FormatEdit(3, 4, DEFAULT_FLAG) in edits
    assert text_edits(edits) == [TextEdit(0, "A"), TextEdit(3, "B")]


def test_flag_survives_empty_blocks() -> None:
    edits = plan("Ends here.\n\nnext")

    assert text_edits(edits) == [TextEdit(12, "N")]


def test_flag_crosses_block_boundary_past_leading_spaces() -> None:
    assert text_edits(plan("One.\n  two")) == [TextEdit(7, "T")]


def test_flag_is_consumed_by_first_letter() -> None:
    assert text_edits(plan("One\n  two")) == []


def test_digits_after_period_keep_flag_pending() -> None:
    edits = plan("3.14 is pi")

    assert text_edits(edits) == [TextEdit(5, "I")]
    assert all(edit.clears for edit in edits if isinstance(edit, FormatEdit))


def test_period_at_block_end_has_no_format_action() -> None:
    edits = plan("Done.")

    assert edits == [FormatEdit(0, 5, None)]


def test_empty_document_plans_nothing() -> None:
    assert plan("") == []
    assert plan("\n\n") == []


def test_word_after_skips_spaces_then_takes_letters() -> None:
    assert word_after("a.  bc d", 2) == (4, 6)
    assert word_after("a.1", 2) == (2, 2)
    assert word_after("a.", 2) == (2, 2)


def test_uppercase_never_changes_length() -> None:
    assert uppercase("é") == "É"
    assert uppercase("ß") == "ß"
    assert uppercase("1") == "1"

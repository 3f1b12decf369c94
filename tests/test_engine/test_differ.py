"""Tests for greedy word-level diff."""

from __future__ import annotations

import pytest

from lexicompare.constants import DifferenceKind, Severity
from lexicompare.engine.differ import context_window, diff_words
from lexicompare.errors import InvalidInput


@pytest.mark.parametrize(
    "text",
    ["", "The cat sat", "one", "Deposition of J. Smith, page 4."],
)
def test_identical_texts_have_no_differences(text: str) -> None:
    assert diff_words(text, text) == []


def test_whitespace_only_change_has_no_differences() -> None:
    assert diff_words("The  cat\tsat", "The cat sat") == []


def test_single_word_modification() -> None:
    diffs = diff_words("The cat sat", "The dog sat")
    assert len(diffs) == 1
    d = diffs[0]
    assert d.kind == DifferenceKind.MODIFICATION
    assert d.before == "cat"
    assert d.after == "dog"
    assert d.position == 4
    assert d.length == 3
    assert d.severity == Severity.MEDIUM
    assert d.context == "The cat sat"


def test_typo_is_low_severity() -> None:
    diffs = diff_words("The contarct is void", "The contract is void")
    assert [(d.kind, d.severity) for d in diffs] == [
        (DifferenceKind.MODIFICATION, Severity.LOW)
    ]


def test_changed_number_is_high_severity() -> None:
    diffs = diff_words("Pay 500 dollars", "Pay 600 dollars")
    assert len(diffs) == 1
    assert diffs[0].severity == Severity.HIGH


def test_negation_swap_is_critical() -> None:
    diffs = diff_words("He did go", "He not go")
    assert len(diffs) == 1
    assert diffs[0].before == "did"
    assert diffs[0].after == "not"
    assert diffs[0].severity == Severity.CRITICAL


def test_dissimilar_word_is_high_modification() -> None:
    diffs = diff_words("The apple fell", "The zebra fell")
    assert len(diffs) == 1
    assert diffs[0].kind == DifferenceKind.MODIFICATION
    assert diffs[0].severity == Severity.HIGH


def test_lookahead_deletion() -> None:
    diffs = diff_words("The enormous cat sat", "The cat sat")
    assert len(diffs) == 1
    d = diffs[0]
    assert d.kind == DifferenceKind.DELETION
    assert d.before == "enormous"
    assert d.after is None
    assert d.position == 4
    assert d.length == len("enormous")
    assert d.severity == Severity.MEDIUM


def test_lookahead_insertion_does_not_advance_position() -> None:
    diffs = diff_words("The cat sat", "The enormous cat sat")
    assert len(diffs) == 1
    d = diffs[0]
    assert d.kind == DifferenceKind.ADDITION
    assert d.after == "enormous"
    assert d.before is None
    assert d.position == 4
    assert d.severity == Severity.MEDIUM


def test_tail_addition_is_low() -> None:
    diffs = diff_words("The cat", "The cat sat down")
    assert len(diffs) == 1
    d = diffs[0]
    assert d.kind == DifferenceKind.ADDITION
    assert d.after == "sat down"
    assert d.position == 8
    assert d.length == len("sat down")
    assert d.severity == Severity.LOW


def test_tail_deletion_is_low() -> None:
    diffs = diff_words("The cat sat down", "The cat")
    assert len(diffs) == 1
    d = diffs[0]
    assert d.kind == DifferenceKind.DELETION
    assert d.before == "sat down"
    assert d.position == 8
    assert d.severity == Severity.LOW


def test_empty_original_is_one_addition() -> None:
    diffs = diff_words("", "brand new text")
    assert [(d.kind, d.after, d.position) for d in diffs] == [
        (DifferenceKind.ADDITION, "brand new text", 0)
    ]


def test_empty_modified_is_one_deletion() -> None:
    diffs = diff_words("old text", "")
    assert [(d.kind, d.before) for d in diffs] == [
        (DifferenceKind.DELETION, "old text")
    ]


def test_positions_advance_over_original_words() -> None:
    diffs = diff_words("a b c d", "a x c y")
    assert [d.position for d in diffs] == [2, 6]


def test_deterministic() -> None:
    a = "The witness stated the car was red and moving fast."
    b = "The witness said the truck was not red and moving slowly."
    assert diff_words(a, b) == diff_words(a, b)


def test_non_string_rejected() -> None:
    with pytest.raises(InvalidInput):
        diff_words(None, "text")  # type: ignore[arg-type]


class TestContextWindow:
    def test_short_text_has_no_ellipsis(self) -> None:
        assert context_window("short text", 3) == "short text"

    def test_cut_on_both_sides(self) -> None:
        text = "a" * 200
        snippet = context_window(text, 100, 50)
        assert snippet == "..." + "a" * 100 + "..."

    def test_cut_at_end_only(self) -> None:
        text = "x" * 120
        assert context_window(text, 10, 50) == "x" * 60 + "..."

    def test_cut_at_start_only(self) -> None:
        text = "y" * 120
        assert context_window(text, 110, 50) == "..." + "y" * 60

    def test_custom_radius_used_by_differ(self) -> None:
        original = "word " * 40 + "cat " + "word " * 40
        modified = "word " * 40 + "dog " + "word " * 40
        diffs = diff_words(original, modified, context_radius=5)
        assert len(diffs) == 1
        assert diffs[0].context == "...word cat w..."

import pytest

from mdquill.cursor import TextCursor
from mdquill.document import MarkdownDocument
from mdquill.pairing import NON_EMPTY_MARKUP_PAIRS, PairMatcher


def make(text, position, anchor=None):
    document = MarkdownDocument(text)
    return document, TextCursor(document, position, anchor)


def test_insert_pair_in_empty_document():
    document, cursor = make("", 0)
    assert PairMatcher().insert_paired_characters(cursor, "(") is True
    assert document.to_plain_text() == "()"
    assert cursor.position == 1


def test_parenthesis_matched_after_non_space():
    document, cursor = make("a", 1)
    assert PairMatcher().insert_paired_characters(cursor, "(") is True
    assert document.to_plain_text() == "a" + "(" + ")"
    assert cursor.position == 2


def test_emphasis_not_matched_after_non_space():
    document, cursor = make("a", 1)
    assert PairMatcher().insert_paired_characters(cursor, "*") is False
    assert document.to_plain_text() == "a"
    assert cursor.position == 1


def test_not_matched_before_non_space():
    document, cursor = make("x y", 2)
    assert PairMatcher().insert_paired_characters(cursor, '"') is False
    assert document.to_plain_text() == "x y"


def test_matched_between_spaces():
    document, cursor = make("x  y", 2)
    assert PairMatcher().insert_paired_characters(cursor, "_") is True
    assert document.to_plain_text() == "x " + "__" + " y"
    assert cursor.position == 3


def test_selection_wrapped_and_still_selected():
    document, cursor = make("hello world", 5, anchor=0)
    assert PairMatcher().insert_paired_characters(cursor, "*") is True
    assert document.to_plain_text() == "*hello* world"
    assert cursor.selected_text() == "hello"
    assert (cursor.selection_start(), cursor.selection_end()) == (1, 6)


def test_selection_across_blocks_not_handled():
    document, cursor = make("ab\ncd", 4, anchor=1)
    assert PairMatcher().insert_paired_characters(cursor, "[") is False
    assert document.to_plain_text() == "ab\ncd"


def test_disabled_auto_match():
    matcher = PairMatcher()
    matcher.auto_match_enabled = False
    document, cursor = make("", 0)
    assert matcher.insert_paired_characters(cursor, "(") is False
    assert document.to_plain_text() == ""


def test_character_filter_disables_pair():
    matcher = PairMatcher()
    matcher.set_character_enabled("(", False)
    document, cursor = make("", 0)
    assert matcher.insert_paired_characters(cursor, "(") is False
    assert matcher.insert_paired_characters(cursor, "[") is True
    assert document.to_plain_text() == "[]"


def test_unknown_character_not_paired():
    document, cursor = make("", 0)
    assert PairMatcher().insert_paired_characters(cursor, "a") is False
    assert document.to_plain_text() == ""


def test_set_character_enabled_rejects_strings():
    with pytest.raises(ValueError):
        PairMatcher().set_character_enabled("ab", True)


def test_end_pair_character_steps_over():
    document, cursor = make("()", 1)
    assert PairMatcher().handle_end_pair_character(cursor, ")") is True
    assert document.to_plain_text() == "()"
    assert cursor.position == 2


def test_end_pair_character_without_match():
    document, cursor = make("(x", 1)
    assert PairMatcher().handle_end_pair_character(cursor, ")") is False
    assert cursor.position == 1


def test_end_pair_character_respects_filter():
    matcher = PairMatcher()
    matcher.set_character_enabled("(", False)
    _, cursor = make("()", 1)
    assert matcher.handle_end_pair_character(cursor, ")") is False
    assert cursor.position == 1


def test_end_pair_character_with_selection():
    _, cursor = make("()", 2, anchor=1)
    assert PairMatcher().handle_end_pair_character(cursor, ")") is False
    assert cursor.position == 2


def test_insert_then_step_over_round_trip():
    matcher = PairMatcher()
    document, cursor = make("", 0)
    matcher.insert_paired_characters(cursor, "{")
    assert matcher.handle_end_pair_character(cursor, "}") is True
    assert cursor.position == len(document.to_plain_text())


@pytest.mark.parametrize("opening", sorted(NON_EMPTY_MARKUP_PAIRS))
def test_whitespace_replaces_closing_character(opening):
    closing = NON_EMPTY_MARKUP_PAIRS[opening]
    document, cursor = make(opening + closing, 1)
    assert PairMatcher().handle_whitespace_in_empty_match(cursor, " ") is True
    assert document.to_plain_text() == opening + " "
    assert cursor.position == 2


def test_whitespace_in_other_pair_not_handled():
    document, cursor = make("()", 1)
    assert PairMatcher().handle_whitespace_in_empty_match(cursor, " ") is False
    assert document.to_plain_text() == "()"


def test_whitespace_at_block_start_not_handled():
    document, cursor = make("**", 0)
    assert PairMatcher().handle_whitespace_in_empty_match(cursor, "\t") is False
    assert document.to_plain_text() == "**"
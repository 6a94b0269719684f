import pytest

from mdquill.autoedit import (
    BULLET_LIST_PATTERN,
    MARKUP_PAIRS,
    block_item_start,
    handle_backspace,
    handle_carriage_return,
    prior_indentation,
)
from mdquill.cursor import TextCursor
from mdquill.document import MarkdownDocument
from mdquill.states import MarkdownState


def make(text, state, position=None):
    document = MarkdownDocument(text)
    for block in document.blocks():
        block.user_state = int(state)
    if position is None:
        position = document.character_count() - 1
    return document, TextCursor(document, position)


# prior_indentation / block_item_start

@pytest.mark.parametrize("text, indent", [
    ("  \tfoo", "  \t"),
    ("", ""),
    ("   ", "   "),
    ("foo  ", ""),
])
def test_prior_indentation(text, indent):
    assert prior_indentation(text) == indent


def test_block_item_start_returns_marker():
    assert block_item_start("  - item", BULLET_LIST_PATTERN) == "  - "


def test_block_item_start_accepts_string_pattern():
    assert block_item_start("> quote", r"^ {0,3}(>\s*)+") == "> "


def test_block_item_start_without_match_is_empty():
    assert block_item_start("plain text", BULLET_LIST_PATTERN) == ""


# handle_carriage_return

def test_numbered_list_increments():
    document, cursor = make("1. item", MarkdownState.NUMBERED_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "1. item\n2. "
    assert cursor.position == len(document.to_plain_text())


def test_numbered_list_with_parenthesis_marker():
    document, cursor = make("9) x", MarkdownState.NUMBERED_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "9) x\n10) "


def test_empty_numbered_item_ends_list():
    document, cursor = make("  3. ", MarkdownState.NUMBERED_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "  " + "\n"
    assert cursor.position == len(document.to_plain_text())


def test_numbered_state_without_marker_uses_indentation():
    document, cursor = make("  text", MarkdownState.NUMBERED_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "  text" + "\n" + "  "


def test_checked_task_continues_unchecked():
    document, cursor = make("- [x] done", MarkdownState.TASK_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "- [x] done\n- [ ] "


def test_empty_task_ends_list():
    document, cursor = make("- [ ] ", MarkdownState.TASK_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "\n"


def test_bullet_list_continues_marker():
    document, cursor = make("  * item", MarkdownState.BULLET_POINT_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "  * item" + "\n" + "  * "


def test_empty_bullet_ends_list_keeping_indentation():
    document, cursor = make("    - ", MarkdownState.BULLET_POINT_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "    " + "\n"


def test_bullet_state_without_marker_uses_indentation():
    document, cursor = make("\tfoo", MarkdownState.BULLET_POINT_LIST)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "\tfoo" + "\n" + "\t"


def test_paragraph_keeps_indentation():
    document, cursor = make("\tfoo", MarkdownState.PARAGRAPH)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "\tfoo" + "\n" + "\t"


def test_middle_of_line_splits_with_indentation():
    document, cursor = make("    abc def", MarkdownState.BULLET_POINT_LIST, position=7)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "    abc" + "\n" + "    " + " def"


def test_indentation_truncated_to_cursor_offset():
    document, cursor = make("    abc", MarkdownState.PARAGRAPH, position=2)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "  " + "\n" + "  " + "  abc"


def test_carriage_return_on_second_line():
    document = MarkdownDocument("intro\n- a")
    document.blocks()[1].user_state = int(MarkdownState.BULLET_POINT_LIST)
    cursor = TextCursor(document, document.character_count() - 1)
    handle_carriage_return(cursor)
    assert document.to_plain_text() == "intro\n- a" + "\n" + "- "


# handle_backspace

def test_backspace_with_selection_is_not_handled():
    document = MarkdownDocument("()")
    cursor = TextCursor(document, 2, 0)
    assert handle_backspace(cursor) is False
    assert document.to_plain_text() == "()"


def test_backspace_removes_empty_numbered_marker():
    document, cursor = make("  1. ", MarkdownState.NUMBERED_LIST)
    assert handle_backspace(cursor) is True
    assert document.to_plain_text() == "  "


def test_backspace_on_numbered_item_with_text_is_not_handled():
    document, cursor = make("1. item", MarkdownState.NUMBERED_LIST)
    assert handle_backspace(cursor) is False
    assert document.to_plain_text() == "1. item"


def test_backspace_removes_empty_task_marker():
    document, cursor = make("- [ ] ", MarkdownState.TASK_LIST)
    assert handle_backspace(cursor) is True
    assert document.to_plain_text() == ""


def test_backspace_deletes_matched_pair():
    document, cursor = make("a()b", MarkdownState.PARAGRAPH, position=2)
    assert handle_backspace(cursor) is True
    assert document.to_plain_text() == "ab"
    assert cursor.position == 1


def test_backspace_pair_disabled():
    document, cursor = make("()", MarkdownState.PARAGRAPH, position=1)
    assert handle_backspace(cursor, auto_match_enabled=False) is False
    assert document.to_plain_text() == "()"


def test_backspace_at_block_start_is_not_handled():
    document, cursor = make("()", MarkdownState.PARAGRAPH, position=0)
    assert handle_backspace(cursor) is False
    assert document.to_plain_text() == "()"


def test_backspace_unmatched_characters_not_handled():
    document, cursor = make("(a", MarkdownState.PARAGRAPH, position=1)
    assert handle_backspace(cursor) is False
    assert document.to_plain_text() == "(a"


def test_backspace_custom_pairs():
    document, cursor = make("$$", MarkdownState.PARAGRAPH, position=1)
    assert handle_backspace(cursor, True, {"$": "$"}) is True
    assert document.to_plain_text() == ""


def test_backspace_pair_not_in_custom_pairs():
    document, cursor = make("()", MarkdownState.PARAGRAPH, position=1)
    assert handle_backspace(cursor, True, {"$": "$"}) is False
    assert document.to_plain_text() == "()"


@pytest.mark.parametrize("opening", sorted(MARKUP_PAIRS))
def test_backspace_every_default_pair(opening):
    text = opening + MARKUP_PAIRS[opening]
    document, cursor = make(text, MarkdownState.PARAGRAPH, position=1)
    assert handle_backspace(cursor) is True
    assert document.to_plain_text() == ""
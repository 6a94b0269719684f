"""Automatic edits on Return and Backspace: list continuation and pair deletion."""

from __future__ import annotations

import re
from collections.abc import Mapping

from .cursor import TextCursor
from .states import MarkdownState, line_state

BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}(>\s*)+")
NUMBERED_LIST_PATTERN = re.compile(r"^\s*([0-9]+)[.)]\s+")
BULLET_LIST_PATTERN = re.compile(r"^\s*[+*-]\s+")
TASK_LIST_PATTERN = re.compile(r"^\s*[-*+] \[([x ])\]\s+")
EMPTY_BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}(>\s*)+$")
EMPTY_NUMBERED_LIST_PATTERN = re.compile(r"^\s*([0-9]+)[.)]\s+$")
EMPTY_BULLET_LIST_PATTERN = re.compile(r"^\s*[+*-]\s+$")
EMPTY_TASK_LIST_PATTERN = re.compile(r"^\s*[-*+] \[([x ])\]\s+$")

_NUMBER = re.compile(r"\d+")
_DIGIT = re.compile(r"\d")
_BULLET_MARK = re.compile(r"[+*-]")

MARKUP_PAIRS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "(": ")",
    "[": "]",
    "{": "}",
    "*": "*",
    "_": "_",
    "`": "`",
    "<": ">",
}


def prior_indentation(text: str) -> str:
    """The leading whitespace of text."""
    stripped = text.lstrip()
    return text[: len(text) - len(stripped)]


def _item_match(text: str, pattern: str | re.Pattern[str]) -> re.Match[str] | None:
    return re.search(pattern, text)


def block_item_start(text: str, pattern: str | re.Pattern[str]) -> str:
    """The text matched by pattern in text, such as a list marker, or ''."""
    match = _item_match(text, pattern)
    return match.group(0) if match else ""


def handle_carriage_return(cursor: TextCursor) -> None:
    """Insert a new line, continuing the current list item or indentation.

    An empty list item ends the list instead: its marker is removed and a
    plain new line is inserted.
    """
    block = cursor.block()
    text = block.text
    offset = cursor.position_in_block()
    end_list = False

    if offset < len(text):
        auto_insert = prior_indentation(text)[:offset]
    else:
        state = line_state(block.user_state)

        if state == MarkdownState.NUMBERED_LIST:
            match = _item_match(text, NUMBERED_LIST_PATTERN)
            if match is not None and match.group(0):
                auto_insert = match.group(0)
                if len(text) == len(auto_insert):
                    end_list = True
                else:
                    number = int(match.group(1)) + 1
                    auto_insert = _NUMBER.sub(str(number), auto_insert)
            else:
                auto_insert = prior_indentation(text)
        elif state == MarkdownState.TASK_LIST:
            auto_insert = block_item_start(text, TASK_LIST_PATTERN)
            if len(text) == len(auto_insert):
                end_list = True
            else:
                # A new task never starts out checked.
                auto_insert = auto_insert.replace("x", " ")
        elif state == MarkdownState.BULLET_POINT_LIST:
            auto_insert = block_item_start(text, BULLET_LIST_PATTERN)
            if not auto_insert:
                auto_insert = prior_indentation(text)
            elif len(text) == len(auto_insert):
                end_list = True
        elif state == MarkdownState.BLOCKQUOTE:
            auto_insert = block_item_start(text, BLOCKQUOTE_PATTERN)
        else:
            auto_insert = prior_indentation(text)

    if end_list:
        cursor.move_to_block_start()
        cursor.move_to_block_end(keep_anchor=True)
        cursor.insert_text(prior_indentation(text))
        auto_insert = ""

    cursor.insert_text("\n" + auto_insert)


def handle_backspace(cursor: TextCursor, auto_match_enabled: bool = True,
                     markup_pairs: Mapping[str, str] | None = None) -> bool:
    """Handle Backspace specially; return False if the default action should run.

    Empty list items lose their marker, and deleting the opening character
    of an auto-matched pair deletes its closing character too.
    """
    if cursor.has_selection():
        return False

    pairs = MARKUP_PAIRS if markup_pairs is None else markup_pairs
    block = cursor.block()
    text = block.text
    state = line_state(block.user_state)
    backtrack = -1

    if state == MarkdownState.NUMBERED_LIST:
        if EMPTY_NUMBERED_LIST_PATTERN.search(text):
            digit = _DIGIT.search(text)
            backtrack = digit.start() if digit else -1
    elif state == MarkdownState.TASK_LIST:
        if EMPTY_BULLET_LIST_PATTERN.search(text) or EMPTY_TASK_LIST_PATTERN.search(text):
            mark = _BULLET_MARK.search(text)
            backtrack = mark.start() if mark else -1
    elif state == MarkdownState.BLOCKQUOTE:
        if EMPTY_BLOCKQUOTE_PATTERN.search(text):
            backtrack = text.rfind(">")
    else:
        offset = cursor.position_in_block()
        if auto_match_enabled and 0 < offset < len(text):
            if pairs.get(text[offset - 1]) == text[offset]:
                cursor.move(-1)
                cursor.move(2, keep_anchor=True)
                cursor.remove_selected_text()
                return True

    if backtrack >= 0:
        cursor.set_position(block.position + backtrack)
        cursor.move_to_block_end(keep_anchor=True)
        cursor.remove_selected_text()
        return True

    return False
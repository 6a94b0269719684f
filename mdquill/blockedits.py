"""Line-oriented edits: list markers, block quotes, indentation, tasks, fences."""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

from .cursor import TextCursor
from .document import MarkdownDocument, TextBlock
from .states import MarkdownState, line_state

_EMPTY_NUMBERED_LIST = re.compile(r"^\s*([0-9]+)[.)]\s+$")
_EMPTY_BULLET_LIST = re.compile(r"^\s*[+*-]\s+$")
_EMPTY_TASK_LIST = re.compile(r"^\s*[-*+] \[([x ])\]\s+$")
_TASK_LIST = re.compile(r"^\s*[-*+] \[([x ])\]\s+")
_NUMBER = re.compile(r"\d+")

_BULLET_ON_INDENT = {"*": "-", "-": "+"}
_BULLET_ON_UNINDENT = {"*": "+", "-": "*"}


class _TrackedEdit:
    """Edits a document while keeping a cursor's anchor and position in step."""

    def __init__(self, cursor: TextCursor) -> None:
        self.cursor = cursor
        self.document: MarkdownDocument = cursor.document
        self.anchor = cursor.anchor
        self.position = cursor.position

    def block(self, number: int) -> TextBlock:
        block = self.document.block_by_number(number)
        if block is None:
            raise IndexError(f"no block numbered {number}")
        return block

    def insert(self, at: int, text: str) -> None:
        if not text:
            return
        self.document.insert_text(at, text)
        size = len(text)
        if self.anchor >= at:
            self.anchor += size
        if self.position >= at:
            self.position += size

    def remove(self, start: int, end: int) -> None:
        if start >= end:
            return
        self.document.remove_text(start, end)
        self.anchor = _after_removal(self.anchor, start, end)
        self.position = _after_removal(self.position, start, end)

    def replace_block_text(self, number: int, text: str) -> None:
        block = self.block(number)
        start = block.position
        self.remove(start, start + len(block.text))
        self.insert(start, text)

    def restore(self) -> None:
        last = self.document.character_count() - 1
        self.cursor.set_position(max(0, min(self.anchor, last)))
        self.cursor.set_position(max(0, min(self.position, last)), keep_anchor=True)


def _after_removal(offset: int, start: int, end: int) -> int:
    if offset >= end:
        return offset - (end - start)
    if offset > start:
        return start
    return offset


@contextmanager
def _tracked(cursor: TextCursor) -> Iterator[_TrackedEdit]:
    edit = _TrackedEdit(cursor)
    try:
        yield edit
    finally:
        edit.restore()


def _block_numbers(cursor: TextCursor) -> range:
    document = cursor.document
    if cursor.has_selection():
        first = document.find_block(cursor.selection_start()).number
        last = document.find_block(cursor.selection_end()).number
    else:
        first = last = cursor.block().number
    return range(first, last + 1)


def selected_blocks(cursor: TextCursor) -> list[TextBlock]:
    """Blocks touched by the selection, or the cursor's block if none."""
    document = cursor.document
    return [document.block_by_number(number) for number in _block_numbers(cursor)]


def insert_prefix_for_blocks(cursor: TextCursor, prefix: str) -> None:
    """Insert prefix at the start of every selected block."""
    with _tracked(cursor) as edit:
        for number in _block_numbers(cursor):
            edit.insert(edit.block(number).position, prefix)


def create_numbered_list(cursor: TextCursor, marker: str) -> None:
    """Number the selected blocks from 1 using marker ('.' or ')')."""
    with _tracked(cursor) as edit:
        for count, number in enumerate(_block_numbers(cursor), start=1):
            edit.insert(edit.block(number).position, f"{count}{marker} ")


def remove_blockquote(cursor: TextCursor) -> None:
    """Remove a leading '>' and one following space from the selected blocks."""
    document = cursor.document
    with _tracked(cursor) as edit:
        for number in _block_numbers(cursor):
            start = edit.block(number).position
            if document.character_at(start) != ">":
                continue
            edit.remove(start, start + 1)
            following = document.character_at(start)
            if following and following != "\n" and following.isspace():
                edit.remove(start, start + 1)


def _indentation(width: int, insert_spaces: bool) -> str:
    return " " * width if insert_spaces else "\t"


def indent_text(cursor: TextCursor, tab_width: int = 4, insert_spaces: bool = False,
                bullet_cycling: bool = True) -> None:
    """Indent the selected blocks, or the cursor's line with list awareness."""
    if tab_width <= 0:
        raise ValueError(f"tab width must be positive: {tab_width}")

    with _tracked(cursor) as edit:
        if cursor.has_selection():
            for number in _block_numbers(cursor):
                edit.insert(edit.block(number).position,
                            _indentation(tab_width, insert_spaces))
            return

        block = cursor.block()
        number = block.number
        text = block.text
        state = line_state(block.user_state)
        indent = tab_width
        at = block.position

        if state == MarkdownState.NUMBERED_LIST:
            if _EMPTY_NUMBERED_LIST.match(text):
                # Restart numbering for the nested list.
                edit.replace_block_text(number, _NUMBER.sub("1", text))
        elif state == MarkdownState.TASK_LIST:
            pass
        elif state == MarkdownState.BULLET_POINT_LIST:
            if _EMPTY_BULLET_LIST.match(text) and bullet_cycling:
                old = text.strip()[0]
                new = _BULLET_ON_INDENT.get(old, "*")
                edit.replace_block_text(number, text.replace(old, new))
        else:
            indent = tab_width - (cursor.position_in_block() % tab_width)
            at = cursor.position

        if state == MarkdownState.NUMBERED_LIST and not _EMPTY_NUMBERED_LIST.match(text):
            at = cursor.position
        elif state == MarkdownState.TASK_LIST and not _EMPTY_TASK_LIST.match(text):
            at = cursor.position
        elif state == MarkdownState.BULLET_POINT_LIST and not _EMPTY_BULLET_LIST.match(text):
            at = cursor.position

        edit.insert(at, _indentation(indent, insert_spaces))


def unindent_text(cursor: TextCursor, tab_width: int = 4, bullet_cycling: bool = True) -> None:
    """Remove one level of indentation from the selected blocks."""
    if tab_width <= 0:
        raise ValueError(f"tab width must be positive: {tab_width}")

    document = cursor.document
    numbers = _block_numbers(cursor)
    with _tracked(cursor) as edit:
        for number in numbers:
            start = edit.block(number).position
            if document.character_at(start) == "\t":
                edit.remove(start, start + 1)
                continue
            removed = 0
            while document.character_at(start) == " " and removed < tab_width:
                edit.remove(start, start + 1)
                removed += 1

        last = edit.block(numbers[-1])
        if (bullet_cycling
                and line_state(last.user_state) == MarkdownState.BULLET_POINT_LIST
                and _EMPTY_BULLET_LIST.match(last.text)):
            old = last.text.strip()[0]
            new = _BULLET_ON_UNINDENT.get(old, "-")
            edit.replace_block_text(last.number, last.text.replace(old, new))


def toggle_task_complete(cursor: TextCursor) -> bool:
    """Check or uncheck the task list items in the selected blocks."""
    with _tracked(cursor) as edit:
        for number in _block_numbers(cursor):
            block = edit.block(number)
            if line_state(block.user_state) != MarkdownState.TASK_LIST:
                continue
            match = _TASK_LIST.match(block.text)
            if match is None:
                continue
            index = block.text.find(" [")
            if index < 0:
                continue
            at = block.position + index + 2
            replacement = " " if match.group(1) == "x" else "x"
            edit.remove(at, at + 1)
            edit.insert(at, replacement)
    return True


def insert_code_fences(cursor: TextCursor) -> None:
    """Wrap the selection in code fences, or insert empty fences."""
    text = "\n" if cursor.block().position != cursor.position else ""
    if cursor.has_selection():
        cursor.insert_text(text + "```\n" + cursor.selected_text() + "\n```\n")
    else:
        cursor.insert_text(text + "```\n\n```\n")
        cursor.move(-5)


def insert_comment(cursor: TextCursor) -> None:
    """Wrap the selection in an HTML comment, or insert an empty one."""
    if cursor.has_selection():
        cursor.insert_text("<!-- " + cursor.selected_text() + " -->")
    else:
        cursor.insert_text("<!--  -->")
        cursor.move(-4)
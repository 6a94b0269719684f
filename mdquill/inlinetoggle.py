"""Toggling inline emphasis, strong and strikethrough markup at a cursor."""

from __future__ import annotations

import unicodedata

from .cursor import TextCursor
from .document import MarkupType

_MARKUP = {
    MarkupType.EMPH: "*",
    MarkupType.STRONG: "**",
    MarkupType.STRIKETHROUGH: "~~",
}


def _is_word_char(ch: str) -> bool:
    return not ch.isspace() and not unicodedata.category(ch).startswith("P")


def _after_removal(offset: int, start: int, length: int) -> int:
    if offset >= start + length:
        return offset - length
    if offset > start:
        return start
    return offset


class InlineMarkupToggle:
    """Adds inline markup around the cursor, or removes it if already there."""

    def __init__(self, markup_type: MarkupType) -> None:
        self.type = markup_type
        self.markup = _MARKUP.get(markup_type, "")

    def __call__(self, cursor: TextCursor) -> None:
        """Apply or remove the markup, leaving the cursor where it belongs."""
        start, end = self.surrounding_markup(cursor)
        if start >= 0:
            self._remove_formatting(cursor, start, end)
        elif cursor.has_selection():
            self._format_selection(cursor)
        elif self.inside_word(cursor):
            self._format_word(cursor)
        else:
            self._format_position(cursor)

    def surrounding_markup(self, cursor: TextCursor) -> tuple[int, int]:
        """Document range of the innermost markup of this type at the cursor.

        Returns (-1, -1) when there is none.
        """
        block = cursor.block()
        data = block.user_data
        if data is None or not data.markup:
            return -1, -1

        pos = cursor.position_in_block()
        match_start = -1
        match_end = block.length() + 1

        for markup in data.markup:
            if (markup.start <= pos <= markup.end + 1
                    and markup.type == self.type
                    and match_start <= markup.start
                    and match_end >= markup.end):
                match_start, match_end = markup.start, markup.end

        if match_start < 0:
            return -1, -1
        return match_start + block.position, match_end + block.position

    def inside_word(self, cursor: TextCursor) -> bool:
        """True if the cursor is within or on the boundary of a word."""
        text = cursor.block().text
        if not text:
            return False
        pos = cursor.position_in_block()
        return ((pos < len(text) - 1 and _is_word_char(text[pos]))
                or (pos > 0 and _is_word_char(text[pos - 1]))
                or (pos < len(text) - 2 and _is_word_char(text[pos + 1])))

    def _format_selection(self, cursor: TextCursor) -> None:
        size = len(self.markup)
        start, end = cursor.selection_start(), cursor.selection_end()
        backwards = cursor.anchor > cursor.position

        cursor.set_position(start)
        cursor.insert_text(self.markup)
        cursor.set_position(end + size)
        cursor.insert_text(self.markup)

        if backwards:
            anchor, position = end + size, start + size
        else:
            anchor, position = start + size, end + size
        cursor.set_position(anchor)
        cursor.set_position(position, keep_anchor=True)

    def _format_word(self, cursor: TextCursor) -> None:
        size = len(self.markup)
        original = cursor.position

        cursor.start_of_word()
        start = cursor.position
        cursor.end_of_word()
        end = cursor.position

        cursor.set_position(end)
        cursor.insert_text(self.markup)
        cursor.set_position(start)
        cursor.insert_text(self.markup)

        position = original
        if position >= end:
            position += size
        if position >= start:
            position += size
        cursor.set_position(position)

    def _format_position(self, cursor: TextCursor) -> None:
        cursor.insert_text(self.markup)
        cursor.insert_text(self.markup)
        cursor.set_position(cursor.position - len(self.markup))

    def _remove_formatting(self, cursor: TextCursor, start: int, end: int) -> None:
        size = len(self.markup)
        anchor, position = cursor.anchor, cursor.position

        cursor.set_position(end)
        for _ in range(size):
            cursor.delete_previous_char()
        anchor = _after_removal(anchor, end - size, size)
        position = _after_removal(position, end - size, size)

        cursor.set_position(start)
        for _ in range(size):
            cursor.delete_char()
        anchor = _after_removal(anchor, start, size)
        position = _after_removal(position, start, size)

        cursor.set_position(anchor)
        cursor.set_position(position, keep_anchor=True)
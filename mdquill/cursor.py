"""Cursor for navigating and editing a MarkdownDocument."""

from __future__ import annotations

from .document import MarkdownDocument, TextBlock


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class TextCursor:
    """A position and anchor in a document; text between them is selected."""

    def __init__(self, document: MarkdownDocument, position: int = 0,
                 anchor: int | None = None) -> None:
        self.document = document
        self._position = 0
        self._anchor = 0
        self.set_position(position if anchor is None else anchor)
        self.set_position(position, keep_anchor=True)

    @property
    def position(self) -> int:
        return self._position

    @property
    def anchor(self) -> int:
        return self._anchor

    def __repr__(self) -> str:
        return f"TextCursor(position={self._position}, anchor={self._anchor})"

    def set_position(self, position: int, keep_anchor: bool = False) -> None:
        """Move to position; the anchor follows unless keep_anchor is set."""
        if not 0 <= position < self.document.character_count():
            raise IndexError(f"position out of range: {position}")
        self._position = position
        if not keep_anchor:
            self._anchor = position

    def has_selection(self) -> bool:
        return self._position != self._anchor

    def selection_start(self) -> int:
        return min(self._position, self._anchor)

    def selection_end(self) -> int:
        return max(self._position, self._anchor)

    def selected_text(self) -> str:
        return self.document.to_plain_text()[self.selection_start():self.selection_end()]

    def block(self) -> TextBlock:
        """The block the cursor position is in."""
        return self.document.find_block(self._position)

    def position_in_block(self) -> int:
        return self._position - self.block().position

    def at_block_end(self) -> bool:
        return self.position_in_block() == len(self.block().text)

    def insert_text(self, text: str) -> None:
        """Replace the selection, if any, with text and move past it."""
        if self.has_selection():
            self.remove_selected_text()
        self.document.insert_text(self._position, text)
        self._position += len(text)
        self._anchor = self._position

    def remove_selected_text(self) -> None:
        if not self.has_selection():
            return
        start, end = self.selection_start(), self.selection_end()
        self.document.remove_text(start, end)
        self._position = self._anchor = start

    def delete_char(self) -> None:
        """Delete the selection, or the character after the cursor."""
        if self.has_selection():
            self.remove_selected_text()
        elif self._position < self.document.character_count() - 1:
            self.document.remove_text(self._position, self._position + 1)

    def delete_previous_char(self) -> None:
        """Delete the selection, or the character before the cursor."""
        if self.has_selection():
            self.remove_selected_text()
        elif self._position > 0:
            self.document.remove_text(self._position - 1, self._position)
            self._position -= 1
            self._anchor = self._position

    def move(self, offset: int, keep_anchor: bool = False) -> bool:
        """Move by offset characters, clamped; True if moved the full distance."""
        wanted = self._position + offset
        target = max(0, min(wanted, self.document.character_count() - 1))
        self.set_position(target, keep_anchor)
        return target == wanted

    def move_to_block_start(self, keep_anchor: bool = False) -> None:
        self.set_position(self.block().position, keep_anchor)

    def move_to_block_end(self, keep_anchor: bool = False) -> None:
        block = self.block()
        self.set_position(block.position + len(block.text), keep_anchor)

    def start_of_word(self) -> None:
        """Move to the start of the word at the cursor."""
        block = self.block()
        offset = self._position - block.position
        while offset > 0 and _is_word_char(block.text[offset - 1]):
            offset -= 1
        self.set_position(block.position + offset)

    def end_of_word(self) -> None:
        """Move to the end of the word at the cursor."""
        block = self.block()
        offset = self._position - block.position
        while offset < len(block.text) and _is_word_char(block.text[offset]):
            offset += 1
        self.set_position(block.position + offset)
"""Text document split into blocks (lines) with per-block state."""

from __future__ import annotations

import os
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

from .states import MarkdownState

UNTITLED = "untitled"


class MarkupType(Enum):
    """Kinds of inline markup tracked per block."""

    EMPH = "emph"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"


@dataclass
class MarkupRange:
    """A span of inline markup within a block, in block offsets."""

    start: int
    end: int
    type: MarkupType


@dataclass
class TextBlockData:
    """Per-block data kept by the highlighter and document statistics."""

    word_count: int = 0
    alpha_numeric_character_count: int = 0
    sentence_count: int = 0
    lix_long_word_count: int = 0
    markup: list[MarkupRange] = field(default_factory=list)

    def clear_markup(self) -> None:
        """Forget all recorded markup ranges."""
        self.markup.clear()


@dataclass(eq=False)
class TextBlock:
    """One line of a document; number and position are kept by the document."""

    text: str = ""
    user_state: int = MarkdownState.UNKNOWN.value
    user_data: TextBlockData | None = None
    number: int = 0
    position: int = 0

    def length(self) -> int:
        """Length of the block including its trailing separator."""
        return len(self.text) + 1


class MarkdownDocument:
    """A plain text document with file path, timestamp and read-only state."""

    def __init__(self, text: str = "") -> None:
        self._blocks: list[TextBlock] = []
        self._load(text)
        self._file_path = ""
        self._display_name = UNTITLED
        self.read_only = False
        self.modified = False
        self.timestamp = datetime.now()
        self.markdown_ast: Any = None
        self._file_path_changed: list[Callable[[], None]] = []
        self._cleared: list[Callable[[], None]] = []
        self._contents_changed: list[Callable[[int, int, int], None]] = []

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def display_name(self) -> str:
        return self._display_name

    def set_file_path(self, path: str | None) -> None:
        """Set the file path; an empty path makes the document untitled."""
        if path:
            self._file_path = os.path.abspath(path)
            self._display_name = os.path.basename(self._file_path)
        else:
            self._file_path = ""
            self.read_only = False
            self.modified = False
            self._display_name = UNTITLED
        for callback in list(self._file_path_changed):
            callback()

    def is_new(self) -> bool:
        """True if the document has no file path."""
        return not self._file_path

    def connect_file_path_changed(self, callback: Callable[[], None]) -> None:
        self._file_path_changed.append(callback)

    def connect_cleared(self, callback: Callable[[], None]) -> None:
        self._cleared.append(callback)

    def connect_contents_changed(self, callback: Callable[[int, int, int], None]) -> None:
        """Call callback(position, chars_removed, chars_added) on each edit."""
        self._contents_changed.append(callback)

    def _load(self, text: str) -> None:
        self._blocks = [TextBlock(line) for line in text.split("\n")]
        self._renumber()

    def _renumber(self) -> None:
        position = 0
        for number, block in enumerate(self._blocks):
            block.number = number
            block.position = position
            position += block.length()

    def _changed(self, position: int, removed: int, added: int) -> None:
        for callback in list(self._contents_changed):
            callback(position, removed, added)

    def clear(self) -> None:
        """Remove all text and notify cleared listeners."""
        removed = self.character_count() - 1
        self._load("")
        self.modified = False
        self._changed(0, removed, 0)
        for callback in list(self._cleared):
            callback()

    def set_plain_text(self, text: str) -> None:
        """Replace the whole document text; all block states are reset."""
        removed = self.character_count() - 1
        self._load(text)
        self.modified = False
        self._changed(0, removed, len(text))

    def to_plain_text(self) -> str:
        return "\n".join(block.text for block in self._blocks)

    def blocks(self) -> list[TextBlock]:
        """All blocks in document order."""
        return list(self._blocks)

    def character_count(self) -> int:
        """Number of characters including the final block separator."""
        return sum(block.length() for block in self._blocks)

    def find_block(self, position: int) -> TextBlock:
        """Return the block holding position; IndexError if out of range."""
        if not 0 <= position < self.character_count():
            raise IndexError(f"position out of range: {position}")
        starts = [block.position for block in self._blocks]
        return self._blocks[bisect_right(starts, position) - 1]

    def block_by_number(self, number: int) -> TextBlock | None:
        """Return the block with the given number, or None if there is none."""
        if 0 <= number < len(self._blocks):
            return self._blocks[number]
        return None

    def character_at(self, position: int) -> str:
        """Character at position, '\\n' at a block end, '' outside the text."""
        if not 0 <= position < self.character_count() - 1:
            return ""
        block = self.find_block(position)
        offset = position - block.position
        return block.text[offset] if offset < len(block.text) else "\n"

    def insert_text(self, position: int, text: str) -> None:
        """Insert text at position; newlines split the block."""
        if not 0 <= position < self.character_count():
            raise IndexError(f"position out of range: {position}")
        if not text:
            return
        block = self.find_block(position)
        offset = position - block.position
        head, tail = block.text[:offset], block.text[offset:]
        parts = text.split("\n")
        if len(parts) == 1:
            block.text = head + text + tail
        else:
            block.text = head + parts[0]
            new_blocks = [TextBlock(part) for part in parts[1:-1]]
            new_blocks.append(TextBlock(parts[-1] + tail))
            index = block.number + 1
            self._blocks[index:index] = new_blocks
        self._renumber()
        self.modified = True
        self._changed(position, 0, len(text))

    def remove_text(self, start: int, end: int) -> str:
        """Remove the characters in [start, end) and return them."""
        if not 0 <= start <= end < self.character_count():
            raise IndexError(f"range out of bounds: {start}..{end}")
        if start == end:
            return ""
        removed = self.to_plain_text()[start:end]
        first = self.find_block(start)
        last = self.find_block(end)
        first.text = first.text[: start - first.position] + last.text[end - last.position:]
        del self._blocks[first.number + 1:last.number + 1]
        self._renumber()
        self.modified = True
        self._changed(start, end - start, 0)
        return removed
"""Automatic pairing of Markdown markup characters while typing."""

from __future__ import annotations

from .autoedit import MARKUP_PAIRS
from .cursor import TextCursor

# Opening characters matched even when they follow a non-space character,
# as in mathematical or programming expressions.
_MATCH_AFTER_NON_SPACE = frozenset("([{<")

# Pairs between which typed whitespace replaces the closing character,
# since such markup cannot enclose only whitespace.
NON_EMPTY_MARKUP_PAIRS: dict[str, str] = {
    "*": "*",
    "_": "_",
    "<": ">",
}


def _check_character(character: str) -> None:
    if len(character) != 1:
        raise ValueError(f"expected a single character: {character!r}")


class PairMatcher:
    """Inserts, skips over and collapses paired markup characters."""

    def __init__(self) -> None:
        self.auto_match_enabled = True
        self.markup_pairs: dict[str, str] = dict(MARKUP_PAIRS)
        self.auto_match_filter: dict[str, bool] = {key: True for key in self.markup_pairs}
        self.non_empty_markup_pairs: dict[str, str] = dict(NON_EMPTY_MARKUP_PAIRS)

    def set_character_enabled(self, character: str, enabled: bool) -> None:
        """Enable or disable automatic matching for an opening character."""
        _check_character(character)
        self.auto_match_filter[character] = bool(enabled)

    def _enabled_for(self, opening: str) -> bool:
        return self.auto_match_filter.get(opening, False)

    def insert_paired_characters(self, cursor: TextCursor, first_char: str) -> bool:
        """Insert first_char with its closing partner; False if not handled.

        A selection within one block is wrapped in the pair and stays
        selected. Without a selection, the pair is inserted only where the
        surrounding characters make a closing character useful.
        """
        _check_character(first_char)
        if not (self.auto_match_enabled
                and first_char in self.markup_pairs
                and self._enabled_for(first_char)):
            return False

        last_char = self.markup_pairs[first_char]
        document = cursor.document

        if cursor.has_selection():
            start, end = cursor.selection_start(), cursor.selection_end()
            if document.find_block(start).number != document.find_block(end).number:
                return False
            cursor.set_position(start)
            cursor.insert_text(first_char)
            cursor.set_position(end + 1)
            cursor.insert_text(last_char)
            cursor.set_position(start + 1)
            cursor.set_position(end + 1, keep_anchor=True)
            return True

        text = cursor.block().text
        pos = cursor.position_in_block()
        do_match = True

        if pos > 0 and not text[pos - 1].isspace():
            if first_char not in _MATCH_AFTER_NON_SPACE:
                do_match = False

        # A non-space character after the cursor means the user is most
        # likely wrapping existing text by hand.
        if not cursor.at_block_end() and not text[pos].isspace():
            do_match = False

        if not do_match:
            return False

        cursor.insert_text(first_char)
        cursor.insert_text(last_char)
        cursor.move(-1)
        return True

    def handle_end_pair_character(self, cursor: TextCursor, ch: str) -> bool:
        """Step over a closing character typed just before an identical one."""
        _check_character(ch)
        if not self.auto_match_enabled or cursor.has_selection():
            return False

        opening = next(
            (key for key, value in self.markup_pairs.items() if value == ch), None
        )
        if opening is None or not self._enabled_for(opening):
            return False

        text = cursor.block().text
        pos = cursor.position_in_block()
        if pos < len(text) and text[pos] == ch:
            cursor.move(1)
            return True
        return False

    def handle_whitespace_in_empty_match(self, cursor: TextCursor, whitespace: str) -> bool:
        """Replace the closing character of an empty non-empty pair with whitespace."""
        _check_character(whitespace)
        text = cursor.block().text
        pos = cursor.position_in_block()

        if (text
                and 0 < pos < len(text)
                and text[pos - 1] in self.non_empty_markup_pairs
                and text[pos] == self.non_empty_markup_pairs[text[pos - 1]]):
            cursor.delete_char()
            cursor.insert_text(whitespace)
            return True
        return False
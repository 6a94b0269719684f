"""Markdown editor model: key handling, list edits, focus and typing signals."""

from __future__ import annotations

from typing import Callable

from . import autoedit, blockedits, support
from .cursor import TextCursor
from .document import MarkdownDocument, MarkupType
from .inlinetoggle import InlineMarkupToggle
from .pairing import PairMatcher
from .types import ColorScheme, EditorWidth, FocusMode, InterfaceStyle

SIGNALS = frozenset({
    "typing_resumed",
    "typing_paused",
    "typing_paused_scaled",
    "cursor_position_changed",
    "text_selected",
    "text_deselected",
    "font_size_changed",
})

TYPING_PAUSE_INTERVAL = 1000
CURSOR_WIDTH = 2
DEFAULT_FONT_FAMILY = "Monospace"
DEFAULT_FONT_SIZE = 12


class MarkdownEditor:
    """Edits a MarkdownDocument through a cursor, with Markdown-aware keys.

    Block states (list, block quote, code block) are read from each block's
    user_state, which a highlighter is expected to keep up to date.
    """

    def __init__(self, document: MarkdownDocument, colors: ColorScheme | None = None) -> None:
        self.document = document
        self._cursor = TextCursor(document)
        self._listeners: dict[str, list[Callable[..., None]]] = {name: [] for name in SIGNALS}
        self._pairs = PairMatcher()

        self.bullet_point_cycling_enabled = True
        self.hemingway_mode_enabled = False
        self.show_unbreakable_spaces = False
        self.show_tabs_and_spaces = False
        self.insert_spaces_for_tabs = False
        self.tab_width = 4
        self.editor_width = EditorWidth.MEDIUM
        self.editor_corners = InterfaceStyle.ROUNDED
        self.focus_mode = FocusMode.DISABLED
        self.extra_selections: list[tuple[int, int]] = []

        self.enable_large_heading_sizes = False
        self.use_underline_for_emphasis = False
        self.italicize_blockquotes = False

        self.font_family = DEFAULT_FONT_FAMILY
        self.font_size = DEFAULT_FONT_SIZE
        self.text_cursor_visible = True

        self.loading_document = False
        self.typing_has_paused = True
        self.scaled_typing_has_paused = True
        self.typing_paused_signal_sent = True
        self.typing_paused_scaled_signal_sent = True
        self.typing_interval = TYPING_PAUSE_INTERVAL
        self.scaled_typing_interval = TYPING_PAUSE_INTERVAL

        self._last_position = self._cursor.position
        self._last_selection: tuple[int, int] | None = None

        self.set_color_scheme(colors if colors is not None else ColorScheme())
        document.connect_contents_changed(lambda *_: self.on_contents_changed())

    # Signals and cursor

    def connect(self, signal: str, callback: Callable[..., None]) -> None:
        """Register callback for the named signal."""
        if signal not in SIGNALS:
            raise ValueError(f"unknown signal: {signal!r}")
        self._listeners[signal].append(callback)

    def _emit(self, signal: str, *args) -> None:
        for callback in list(self._listeners[signal]):
            callback(*args)

    @property
    def text_cursor(self) -> TextCursor:
        """A copy of the editor's cursor."""
        cursor = self._valid_cursor()
        return TextCursor(self.document, cursor.position, cursor.anchor)

    @property
    def auto_match_enabled(self) -> bool:
        return self._pairs.auto_match_enabled

    def set_text_cursor(self, cursor: TextCursor) -> None:
        """Move the editor's cursor to the position and anchor of cursor."""
        self._cursor.set_position(cursor.anchor)
        self._cursor.set_position(cursor.position, keep_anchor=True)
        self._sync()

    def _valid_cursor(self) -> TextCursor:
        last = self.document.character_count() - 1
        cursor = self._cursor
        if cursor.anchor > last or cursor.position > last:
            cursor.set_position(min(cursor.anchor, last))
            cursor.set_position(min(cursor.position, last), keep_anchor=True)
        return cursor

    def _sync(self) -> None:
        cursor = self._valid_cursor()
        if cursor.position != self._last_position:
            self._last_position = cursor.position
            self.text_cursor_visible = True
            self._emit("cursor_position_changed", cursor.position)

        selection = (
            (cursor.selection_start(), cursor.selection_end())
            if cursor.has_selection() else None
        )
        if selection != self._last_selection:
            self._last_selection = selection
            if selection is None:
                self._emit("text_deselected")
            else:
                self._emit("text_selected", cursor.selected_text(), *selection)

        self._focus_text()

    # Settings

    def set_plain_text(self, text: str) -> None:
        """Load text without it counting as typing."""
        self.loading_document = True
        self.typing_has_paused = True
        self.scaled_typing_has_paused = True
        try:
            self.document.set_plain_text(text)
            self._cursor.set_position(0)
        finally:
            self.loading_document = False
        self._sync()

    def set_focus_mode(self, mode: FocusMode) -> None:
        self.focus_mode = FocusMode(mode)
        if self.focus_mode == FocusMode.DISABLED:
            self.extra_selections = []
        else:
            self._focus_text()

    def set_color_scheme(self, colors: ColorScheme) -> None:
        self.colors = colors
        self.cursor_color = colors.cursor
        self.whitespace_render_color = colors.list_markup
        self.unbreakable_space_render_color = colors.error
        self.block_color = colors.foreground.with_alpha(10)
        self.fade_color = colors.foreground.with_alpha(100)
        self._focus_text()

    def set_font(self, family: str, size: float) -> None:
        if size <= 0:
            raise ValueError(f"font size must be positive: {size}")
        self.font_family = family
        self.font_size = size

    def set_auto_match_enabled(self, enabled: bool) -> None:
        self._pairs.auto_match_enabled = bool(enabled)

    def set_auto_match_character(self, character: str, enabled: bool) -> None:
        self._pairs.set_character_enabled(character, enabled)

    def set_tabulation_width(self, width: int) -> None:
        if width <= 0:
            raise ValueError(f"tab width must be positive: {width}")
        self.tab_width = width

    # Keys

    def handle_return(self, shift: bool = False, control: bool = False) -> None:
        cursor = self._valid_cursor()
        if cursor.has_selection():
            cursor.insert_text("\n")
        else:
            if shift:
                # Markdown-style line break.
                cursor.insert_text("  ")
            if control:
                cursor.insert_text("\n")
            else:
                autoedit.handle_carriage_return(cursor)
        self._sync()

    def handle_backspace(self) -> None:
        if self.hemingway_mode_enabled:
            return
        cursor = self._valid_cursor()
        if not autoedit.handle_backspace(cursor, self._pairs.auto_match_enabled,
                                         self._pairs.markup_pairs):
            cursor.delete_previous_char()
        self._sync()

    def handle_delete(self) -> None:
        if self.hemingway_mode_enabled:
            return
        self._valid_cursor().delete_char()
        self._sync()

    def handle_tab(self) -> None:
        cursor = self._valid_cursor()
        if not self._pairs.handle_whitespace_in_empty_match(cursor, "\t"):
            self.indent_text()
            return
        self._sync()

    def handle_backtab(self) -> None:
        self.unindent_text()

    def handle_space(self) -> None:
        cursor = self._valid_cursor()
        if not self._pairs.handle_whitespace_in_empty_match(cursor, " "):
            cursor.insert_text(" ")
        self._sync()

    def type_character(self, ch: str) -> None:
        """Type text; a single character may be auto-paired or stepped over."""
        cursor = self._valid_cursor()
        if len(ch) == 1:
            if not (self._pairs.handle_end_pair_character(cursor, ch)
                    or self._pairs.insert_paired_characters(cursor, ch)):
                cursor.insert_text(ch)
        else:
            cursor.insert_text(ch)
        self._sync()

    def navigate_document(self, position: int) -> None:
        self._valid_cursor().set_position(position)
        self._sync()

    # Formatting actions

    def _toggle(self, markup_type: MarkupType) -> None:
        InlineMarkupToggle(markup_type)(self._valid_cursor())
        self._sync()

    def bold(self) -> None:
        self._toggle(MarkupType.STRONG)

    def italic(self) -> None:
        self._toggle(MarkupType.EMPH)

    def strikethrough(self) -> None:
        self._toggle(MarkupType.STRIKETHROUGH)

    def insert_code_fences(self) -> None:
        blockedits.insert_code_fences(self._valid_cursor())
        self._sync()

    def insert_comment(self) -> None:
        blockedits.insert_comment(self._valid_cursor())
        self._sync()

    def _prefix(self, prefix: str) -> None:
        blockedits.insert_prefix_for_blocks(self._valid_cursor(), prefix)
        self._sync()

    def create_bullet_list(self, marker: str = "*") -> None:
        if marker not in ("*", "-", "+"):
            raise ValueError(f"invalid bullet marker: {marker!r}")
        self._prefix(f"{marker} ")

    def create_numbered_list(self, marker: str = ".") -> None:
        if marker not in (".", ")"):
            raise ValueError(f"invalid numbered list marker: {marker!r}")
        blockedits.create_numbered_list(self._valid_cursor(), marker)
        self._sync()

    def create_task_list(self) -> None:
        self._prefix("- [ ] ")

    def create_blockquote(self) -> None:
        self._prefix("> ")

    def remove_blockquote(self) -> None:
        blockedits.remove_blockquote(self._valid_cursor())
        self._sync()

    def indent_text(self) -> None:
        blockedits.indent_text(self._valid_cursor(), self.tab_width,
                               self.insert_spaces_for_tabs,
                               self.bullet_point_cycling_enabled)
        self._sync()

    def unindent_text(self) -> None:
        blockedits.unindent_text(self._valid_cursor(), self.tab_width,
                                 self.bullet_point_cycling_enabled)
        self._sync()

    def toggle_task_complete(self) -> bool:
        result = blockedits.toggle_task_complete(self._valid_cursor())
        self._sync()
        return result

    def insert_image(self, image_path: str) -> None:
        """Insert a Markdown image link to image_path at the cursor."""
        if not image_path:
            return
        document_path = None if self.document.is_new() else self.document.file_path
        self._valid_cursor().insert_text(support.image_link(image_path, document_path))
        self._sync()

    # Font size

    def _change_font_size(self, size: int) -> None:
        size = max(1, size)
        self.set_font(self.font_family, size)
        self._emit("font_size_changed", size)

    def increase_font_size(self) -> None:
        self._change_font_size(int(self.font_size) + 1)

    def decrease_font_size(self) -> None:
        self._change_font_size(int(self.font_size) - 1)

    def zoom(self, delta: int) -> bool:
        """Change the font size by one step in the direction of delta."""
        if delta == 0:
            return False
        step = 1 if delta > 0 else -1
        self._change_font_size(int(self.font_size) + step)
        return True

    # Focus and typing

    def focus_ranges(self) -> list[tuple[int, int]]:
        """Document ranges faded under the current focus mode."""
        if self.focus_mode == FocusMode.DISABLED:
            return []
        return support.focus_ranges(self.document, self._valid_cursor().position,
                                    self.focus_mode)

    def _focus_text(self) -> None:
        if getattr(self, "focus_mode", FocusMode.DISABLED) != FocusMode.DISABLED:
            self.extra_selections = self.focus_ranges()

    def on_contents_changed(self) -> None:
        if self.loading_document:
            return
        if self.typing_has_paused or self.scaled_typing_has_paused:
            self.typing_has_paused = False
            self.scaled_typing_has_paused = False
            self.typing_paused_signal_sent = False
            self.typing_paused_scaled_signal_sent = False
            self._emit("typing_resumed")

    def check_if_typing_paused(self) -> None:
        """Called once per typing interval; signals the first pause after typing."""
        if (not self.loading_document and self.typing_has_paused
                and not self.typing_paused_signal_sent):
            self.typing_paused_signal_sent = True
            self._emit("typing_paused")
        self.typing_has_paused = True

    def check_if_typing_paused_scaled(self) -> None:
        """Like check_if_typing_paused, with an interval scaled to document size."""
        if (not self.loading_document and self.scaled_typing_has_paused
                and not self.typing_paused_scaled_signal_sent):
            self.typing_paused_scaled_signal_sent = True
            self._emit("typing_paused_scaled")
        self.scaled_typing_interval = support.scaled_typing_interval(
            self.document.character_count()
        )
        self.scaled_typing_has_paused = True
"""Editor option enumerations, colours and the editor colour scheme."""

from __future__ import annotations

import string
from dataclasses import dataclass, replace
from enum import IntEnum


class FocusMode(IntEnum):
    """Which portion of the text stays in focus while the rest is faded."""

    DISABLED = 0
    SENTENCE = 1
    CURRENT_LINE = 2
    THREE_LINES = 3
    PARAGRAPH = 4
    TYPEWRITER = 5


class EditorWidth(IntEnum):
    """Preferred width of the text area."""

    NARROW = 0
    MEDIUM = 1
    WIDE = 2
    FULL = 3


class InterfaceStyle(IntEnum):
    """Corner style for painted block backgrounds."""

    ROUNDED = 0
    SQUARE = 1


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} channel out of range: {value}")

    def with_alpha(self, alpha: int) -> Color:
        """Return a copy of this colour with a different alpha."""
        return replace(self, alpha=alpha)

    def to_hex(self) -> str:
        """Return '#rrggbb', or '#rrggbbaa' when not fully opaque."""
        text = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha != 255:
            text += f"{self.alpha:02x}"
        return text


def parse_color(text: str) -> Color:
    """Parse '#rgb', '#rrggbb' or '#rrggbbaa' into a Color."""
    value = text.strip()
    if not value.startswith("#"):
        raise ValueError(f"not a colour: {text!r}")
    digits = value[1:]
    if not digits or any(c not in string.hexdigits for c in digits):
        raise ValueError(f"not a colour: {text!r}")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) not in (6, 8):
        raise ValueError(f"not a colour: {text!r}")
    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    return Color(*channels)


_BLACK = Color(0, 0, 0)
_WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class ColorScheme:
    """Colours used to paint and highlight the editor."""

    foreground: Color = _BLACK
    background: Color = _WHITE
    selection: Color = Color(180, 200, 230)
    cursor: Color = _BLACK
    link: Color = Color(30, 90, 200)
    image: Color = Color(30, 90, 200)
    inline_html: Color = Color(120, 120, 120)
    heading_text: Color = _BLACK
    heading_markup: Color = Color(120, 120, 120)
    emphasis_text: Color = _BLACK
    emphasis_markup: Color = Color(120, 120, 120)
    blockquote_text: Color = Color(80, 80, 80)
    blockquote_markup: Color = Color(120, 120, 120)
    divider: Color = Color(120, 120, 120)
    list_markup: Color = Color(120, 120, 120)
    code_text: Color = Color(60, 60, 60)
    code_markup: Color = Color(120, 120, 120)
    error: Color = Color(200, 30, 30)


_WIDTH_IN_CHARACTERS = {
    EditorWidth.NARROW: 60,
    EditorWidth.MEDIUM: 80,
    EditorWidth.WIDE: 100,
}


def paper_margin(editor_width: EditorWidth, viewport_width: int, char_width: int) -> int:
    """Return the side margin that centres the text area in the viewport."""
    columns = _WIDTH_IN_CHARACTERS.get(EditorWidth(editor_width))
    if columns is None:
        return 0
    width = char_width * columns
    if width <= viewport_width:
        return (viewport_width - width) // 2
    return 0


def corner_radius(style: InterfaceStyle) -> int:
    """Return the corner radius for painted block backgrounds."""
    return 0 if InterfaceStyle(style) == InterfaceStyle.SQUARE else 5
"""Helpers for the editor: image links, focus ranges, typing timers, markers."""

from __future__ import annotations

import mimetypes
import os
import re
from typing import Iterable

from .document import MarkdownDocument, TextBlock
from .states import is_code_block_state
from .types import FocusMode

UNBREAKABLE_SPACE = "\u00a0"
DOUBLE_SPACE = "  "
LINE_BREAK_CHAR = "\u21b5"

WEB_MIME_TYPES = (
    "image/png",
    "image/jpeg",
    "image/webp",
    "image/apng",
    "image/avif",
    "image/gif",
    "image/svg",
)

_KNOWN_MIME_TYPES = {
    "image/png": ("PNG image", ("*.png",)),
    "image/jpeg": ("JPEG image", ("*.jpg", "*.jpeg", "*.jpe")),
    "image/webp": ("WebP image", ("*.webp",)),
    "image/apng": ("APNG image", ("*.apng",)),
    "image/avif": ("AVIF image", ("*.avif",)),
    "image/gif": ("GIF image", ("*.gif",)),
    "image/svg+xml": ("SVG image", ("*.svg", "*.svgz")),
}

_SENTENCE_END = re.compile(r"[.!?]+[\"'\u201d\u2019)\]]*\s+")


def image_link(image_path: str, document_path: str | None = None) -> str:
    """Markdown image link for image_path.

    The path is made relative to the document's directory when both the
    image and the document exist on disk; otherwise a file:// URL is used.
    """
    path = image_path
    relative = False
    if os.path.exists(image_path) and document_path and os.path.exists(document_path):
        base = os.path.dirname(os.path.abspath(document_path))
        path = os.path.relpath(os.path.abspath(image_path), base).replace(os.sep, "/")
        relative = True
    if not relative:
        path = "file://" + image_path
    return f"![]({path})"


def _describe_mime_type(mime_type: str) -> tuple[str, tuple[str, ...]]:
    known = _KNOWN_MIME_TYPES.get(mime_type)
    if known is not None:
        return known
    extensions = mimetypes.guess_all_extensions(mime_type)
    return mime_type, tuple(f"*{ext}" for ext in sorted(set(extensions)))


def build_image_filters(mime_types: Iterable[str], include_wildcard_images: bool = False) -> str:
    """File dialog filter string for the given image MIME types."""
    filters = []
    all_patterns = []
    for mime_type in mime_types:
        comment, patterns = _describe_mime_type(mime_type)
        joined = " ".join(patterns)
        filters.append(f"{comment} ({joined})")
        if include_wildcard_images:
            all_patterns.append(joined)
    if include_wildcard_images:
        filters.insert(0, f"Images ({' '.join(p for p in all_patterns if p)})")
    return ";;".join(filters)


def _sentence_boundaries(text: str) -> list[int]:
    bounds = {0, len(text)}
    bounds.update(match.end() for match in _SENTENCE_END.finditer(text))
    return sorted(bounds)


def sentence_bounds(text: str, position: int) -> tuple[int, int]:
    """Offsets of the sentence boundaries before and after position in text."""
    if not 0 <= position <= len(text):
        raise ValueError(f"position out of range: {position}")
    bounds = _sentence_boundaries(text)
    start = max((b for b in bounds if b < position), default=0)
    end = min((b for b in bounds if b > position), default=len(text))
    return start, end


def _block_end(block: TextBlock) -> int:
    return block.position + len(block.text)


def focus_ranges(document: MarkdownDocument, position: int,
                 mode: FocusMode) -> list[tuple[int, int]]:
    """Document ranges to fade for the given focus mode and cursor position."""
    mode = FocusMode(mode)
    block = document.find_block(position)
    doc_end = document.character_count() - 1
    ranges: list[tuple[int, int]] = []

    if mode == FocusMode.CURRENT_LINE:
        previous = document.block_by_number(block.number - 1)
        if previous is not None:
            ranges.append((0, _block_end(previous)))
        ranges.append((_block_end(block), doc_end))
    elif mode == FocusMode.THREE_LINES:
        two_up = document.block_by_number(block.number - 2)
        if two_up is not None:
            ranges.append((0, _block_end(two_up)))
        following = document.block_by_number(block.number + 1) or block
        ranges.append((_block_end(following), doc_end))
    elif mode == FocusMode.PARAGRAPH:
        ranges.append((0, block.position))
        ranges.append((_block_end(block), doc_end))
    elif mode == FocusMode.SENTENCE:
        start, end = sentence_bounds(block.text, position - block.position)
        ranges.append((0, block.position + start))
        ranges.append((block.position + end, doc_end))
    return ranges


def scaled_typing_interval(character_count: int) -> int:
    """Typing pause interval in milliseconds, scaled to document size."""
    interval = (character_count // 30000) * 20
    return max(20, min(interval, 1000))


def line_break_blocks(document: MarkdownDocument, cursor_position: int) -> list[TextBlock]:
    """Blocks that end in a Markdown line break and should show its symbol."""
    return [
        block
        for block in document.blocks()
        if not is_code_block_state(block.user_state)
        and block.text.endswith(DOUBLE_SPACE)
        and cursor_position != block.position + block.length() - 1
    ]


def unbreakable_space_offsets(text: str) -> list[int]:
    """Offsets of every unbreakable space in text."""
    return [index for index, ch in enumerate(text) if ch == UNBREAKABLE_SPACE]
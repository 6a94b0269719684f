"""Line states recorded for each block (line) of a Markdown document.

The middle byte of a state holds the line state proper, the high byte flags
nested structures (block quote, code block) and the low two bytes hold the
indentation depth.
"""

from __future__ import annotations

from enum import IntEnum


class MarkdownState(IntEnum):
    """Line state values and flags for document blocks."""

    UNKNOWN = -1
    PARAGRAPH_BREAK = 0x00000000
    PARAGRAPH = 0x00010000
    ATX_HEADING_1 = 0x00020000
    ATX_HEADING_2 = 0x00030000
    ATX_HEADING_3 = 0x00040000
    ATX_HEADING_4 = 0x00050000
    ATX_HEADING_5 = 0x00060000
    ATX_HEADING_6 = 0x00070000
    SETEXT_HEADING_1 = 0x00080000
    SETEXT_HEADING_2 = 0x00090000
    HORIZONTAL_RULE = 0x000A0000
    PIPE_TABLE_HEADER = 0x000B0000
    PIPE_TABLE_DIVIDER = 0x000C0000
    PIPE_TABLE_ROW = 0x000D0000
    NUMBERED_LIST = 0x000E0000
    BULLET_POINT_LIST = 0x000F0000
    TASK_LIST = 0x00100000
    BLOCKQUOTE = 0x02000000
    CODE_BLOCK = 0x04000000
    MASK = 0x00FF0000


HEADER_STATES = (
    MarkdownState.ATX_HEADING_1,
    MarkdownState.ATX_HEADING_2,
    MarkdownState.ATX_HEADING_3,
    MarkdownState.ATX_HEADING_4,
    MarkdownState.ATX_HEADING_5,
    MarkdownState.ATX_HEADING_6,
)


def line_state(user_state: int) -> int:
    """Return only the line state byte of a block's user state."""
    return int(user_state) & int(MarkdownState.MASK)


def _has_flag(user_state: int, flag: MarkdownState) -> bool:
    if user_state < 0:
        return False
    return (int(user_state) & int(flag)) == int(flag)


def is_blockquote_state(user_state: int) -> bool:
    """Return True if the state carries the block quote flag."""
    return _has_flag(user_state, MarkdownState.BLOCKQUOTE)


def is_code_block_state(user_state: int) -> bool:
    """Return True if the state carries the code block flag."""
    return _has_flag(user_state, MarkdownState.CODE_BLOCK)


def atx_heading_level(user_state: int) -> int:
    """Return the ATX heading level (1-6) of a state, or 0 if not a heading."""
    state = line_state(user_state)
    for level, heading in enumerate(HEADER_STATES, start=1):
        if state == heading:
            return level
    return 0
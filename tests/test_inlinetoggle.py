import pytest

from mdquill.cursor import TextCursor
from mdquill.document import MarkdownDocument, MarkupRange, MarkupType, TextBlockData
from mdquill.inlinetoggle import InlineMarkupToggle


def _doc_with_markup(text, block_number, ranges):
    doc = MarkdownDocument(text)
    doc.block_by_number(block_number).user_data = TextBlockData(markup=list(ranges))
    return doc


def test_format_word_strong():
    doc = MarkdownDocument("hello world")
    cursor = TextCursor(doc, 2)
    InlineMarkupToggle(MarkupType.STRONG)(cursor)
    assert doc.to_plain_text() == "**hello** world"
    assert cursor.position == 2 + len("**")
    assert not cursor.has_selection()


def test_format_position_outside_word():
    doc = MarkdownDocument("x   y")
    cursor = TextCursor(doc, 2)
    InlineMarkupToggle(MarkupType.EMPH)(cursor)
    text = doc.to_plain_text()
    assert text.replace("**", "", 1) == "x   y"
    assert text[2:4] == "**"
    assert cursor.position == 3


def test_format_selection_forward():
    doc = MarkdownDocument("hello world")
    cursor = TextCursor(doc, 11, anchor=6)
    InlineMarkupToggle(MarkupType.STRIKETHROUGH)(cursor)
    assert doc.to_plain_text() == "hello ~~world~~"
    assert cursor.selected_text() == "world"
    assert cursor.anchor < cursor.position


def test_format_selection_backward_keeps_direction():
    doc = MarkdownDocument("hello world")
    cursor = TextCursor(doc, 6, anchor=11)
    InlineMarkupToggle(MarkupType.EMPH)(cursor)
    assert doc.to_plain_text().replace("*", "") == "hello world"
    assert cursor.selected_text() == "world"
    assert cursor.anchor > cursor.position


def test_surrounding_markup_found():
    doc = _doc_with_markup("**hello** world", 0, [MarkupRange(0, 9, MarkupType.STRONG)])
    cursor = TextCursor(doc, 4)
    assert InlineMarkupToggle(MarkupType.STRONG).surrounding_markup(cursor) == (0, 9)


def test_surrounding_markup_other_type_ignored():
    doc = _doc_with_markup("**hello** world", 0, [MarkupRange(0, 9, MarkupType.STRONG)])
    cursor = TextCursor(doc, 4)
    assert InlineMarkupToggle(MarkupType.EMPH).surrounding_markup(cursor) == (-1, -1)


def test_surrounding_markup_without_data():
    doc = MarkdownDocument("**hello**")
    assert InlineMarkupToggle(MarkupType.STRONG).surrounding_markup(TextCursor(doc, 3)) == (-1, -1)


def test_surrounding_markup_offset_by_block_position():
    doc = _doc_with_markup("first\n**bold**", 1, [MarkupRange(0, 8, MarkupType.STRONG)])
    block = doc.block_by_number(1)
    cursor = TextCursor(doc, block.position + 3)
    start, end = InlineMarkupToggle(MarkupType.STRONG).surrounding_markup(cursor)
    assert (start, end) == (block.position, block.position + 8)


def test_surrounding_markup_prefers_innermost():
    doc = _doc_with_markup(
        "*aaaa *bbb* cccc*",
        0,
        [MarkupRange(0, 17, MarkupType.EMPH), MarkupRange(6, 11, MarkupType.EMPH)],
    )
    cursor = TextCursor(doc, 8)
    assert InlineMarkupToggle(MarkupType.EMPH).surrounding_markup(cursor) == (6, 11)


def test_remove_existing_markup():
    doc = _doc_with_markup("**hello** world", 0, [MarkupRange(0, 9, MarkupType.STRONG)])
    cursor = TextCursor(doc, 4)
    InlineMarkupToggle(MarkupType.STRONG)(cursor)
    assert doc.to_plain_text() == "hello world"
    assert cursor.position == 2


def test_apply_then_remove_round_trip():
    doc = MarkdownDocument("say hello now")
    cursor = TextCursor(doc, 6)
    toggle = InlineMarkupToggle(MarkupType.STRIKETHROUGH)
    toggle(cursor)
    text = doc.to_plain_text()
    start = text.index("~~")
    end = text.rindex("~~") + 2
    doc.block_by_number(0).user_data = TextBlockData(
        markup=[MarkupRange(start, end, MarkupType.STRIKETHROUGH)]
    )
    toggle(cursor)
    assert doc.to_plain_text() == "say hello now"


@pytest.mark.parametrize(
    "text, position, expected",
    [
        ("hello world", 5, True),
        ("hello world", 0, True),
        ("", 0, False),
        ("a . b", 2, False),
    ],
)
def test_inside_word(text, position, expected):
    doc = MarkdownDocument(text)
    assert InlineMarkupToggle(MarkupType.EMPH).inside_word(TextCursor(doc, position)) is expected
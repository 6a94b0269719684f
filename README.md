# mdquill

A toolkit-independent Markdown editing engine. It keeps a plain-text
document split into blocks (lines), each carrying a Markdown line state,
and applies the editing behaviour a writer expects from a Markdown editor:

- continuing numbered, bullet and task lists and blockquotes on Return,
  and ending a list when Return is pressed on an empty item;
- backspacing over empty list markers and auto-matched pairs;
- auto-pairing of quotes, brackets and emphasis characters, stepping over
  typed closing characters;
- indenting and unindenting, with bullet-marker cycling for nested lists;
- toggling bold, italic and strikethrough markup around a selection,
  a word or the cursor position;
- inserting code fences, HTML comments and image links;
- focus-mode fade ranges, typing-pause notifications and a background
  file writer.

## Installation

```
pip install mdquill
```

## Usage

The editing behaviour depends on each block's `user_state`, a value from
`mdquill.states.MarkdownState`. The package does not compute these
states itself; set them for the blocks you edit:

```python
from mdquill.document import MarkdownDocument
from mdquill.editor import MarkdownEditor
from mdquill.states import MarkdownState
from mdquill.types import ColorScheme

document = MarkdownDocument("* first item")
document.blocks()[0].user_state = MarkdownState.BULLET_POINT_LIST

editor = MarkdownEditor(document, ColorScheme())
editor.navigate_document(len("* first item"))
editor.handle_return()
print(document.to_plain_text())   # "* first item\n* "
```

`MarkdownEditor` signals are registered with `connect(name, callback)`;
the names are `typing_resumed`, `typing_paused`, `typing_paused_scaled`,
`cursor_position_changed`, `text_selected`, `text_deselected` and
`font_size_changed`. The typing-pause signals are raised by calling
`check_if_typing_paused()` and `check_if_typing_paused_scaled()` from your
own timer; after each scaled check, `scaled_typing_interval` holds the
interval to wait next, in milliseconds.

Lower-level pieces can be used on their own:

- `mdquill.cursor.TextCursor` moves through and edits a `MarkdownDocument`;
- `mdquill.blockedits` and `mdquill.autoedit` apply single edits to a cursor
  (`indent_text`, `toggle_task_complete`, `handle_carriage_return`, ...);
- `mdquill.pairing.PairMatcher` handles auto-paired characters;
- `mdquill.inlinetoggle.InlineMarkupToggle` toggles inline markup, using the
  `MarkupRange` entries recorded in a block's `user_data`;
- `mdquill.support` computes image links, file dialog filter strings,
  sentence bounds and focus-mode fade ranges;
- `mdquill.types` holds `FocusMode`, `EditorWidth`, `InterfaceStyle`,
  `Color`, `ColorScheme` and `paper_margin`.

To save text without blocking the caller, use the writer:

```python
from mdquill.asyncwriter import AsyncTextWriter

with AsyncTextWriter("notes.md") as writer:
    writer.connect_write_error(print)
    writer.write("# Notes\n")
```

`write_to_disk(text, file_name, encoding)` does the same synchronously and
raises `OSError` on failure.

## What it does not do

- It does not parse Markdown or highlight it: block states and inline
  markup ranges must be supplied by the caller.
- It has no user interface: nothing is drawn, and there are no file or
  image dialogs. Colours, fade ranges, margins and corner radii are
  provided as values for a front end to use.
- It provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```
"""Line-oriented scanners for constructs a single pattern cannot express.

Lists nest by indentation only, Markdown tables need a synthesized separator
after their first row, and paragraphs must never wrap block-level elements.
Each scanner walks the document once, carrying a small state record from
`models`.
"""

from __future__ import annotations

import re

from .models import ListKind, ListLevel, ListState, ParagraphState, TableState

LIST_ITEM_PATTERNS = (
    (ListKind.UNORDERED, re.compile(r"^(\s*)\* (.*)$")),
    (ListKind.ORDERED, re.compile(r"^(\s*)1\. (.*)$")),
)
TABLE_ROW_PATTERN = re.compile(r"^\|.*\|$")

BLOCK_CONTAINER_TAGS = ("table", "div", "blockquote", "dl", "ul", "ol", "pre")
BLOCK_START_PATTERN = re.compile(
    r"^(?:</?(?:h[1-6]|hr|table|tr|div|blockquote|dl|dt|ul|ol|li|pre)\b|\x00B\d+\x00)"
)
BLOCK_OPEN_PATTERN = re.compile(rf"<(?:{'|'.join(BLOCK_CONTAINER_TAGS)})\b")
BLOCK_CLOSE_PATTERN = re.compile(rf"</(?:{'|'.join(BLOCK_CONTAINER_TAGS)})>")
BLOCK_SPLIT_BEFORE_PATTERN = re.compile(
    rf"(?<=\S)[ \t]*(?=<(?:{'|'.join(BLOCK_CONTAINER_TAGS)})\b|\x00B\d+\x00)"
)
BLOCK_SPLIT_AFTER_PATTERN = re.compile(
    rf"(</(?:{'|'.join(BLOCK_CONTAINER_TAGS)})>|\x00B\d+\x00)[ \t]*(?=\S)"
)


def leading_whitespace_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Tabs advance to the next multiple of four columns.

    Examples:
        leading_whitespace_columns("    text")  # 4
        leading_whitespace_columns("\\ttext")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
            continue
        if character == "\t":
            columns += 4 - (columns % 4)
            continue
        break
    return columns


def match_list_item(line: str) -> tuple[ListKind, str, str] | None:
    """Classify a line as a list item.

    Returns:
        tuple[ListKind, str, str] | None: Kind, leading whitespace and item text,
            or None when the line is not a list item.

    Examples:
        match_list_item("  * nested")  # (ListKind.UNORDERED, "  ", "nested")
    """
    for kind, pattern in LIST_ITEM_PATTERNS:
        match = pattern.match(line)
        if match:
            return kind, match.group(1), match.group(2)
    return None


def _close_level(state: ListState, output: list[str]) -> None:
    level = state.levels.pop()
    output.append(level.prefix + level.kind.close_tag)


def _close_all_levels(state: ListState, output: list[str]) -> None:
    while state.levels:
        _close_level(state, output)


def _try_close_deeper_levels(state: ListState, indent: int, output: list[str]) -> bool:
    """Close every container opened deeper than `indent`.

    Returns:
        bool: True when at least one container was closed.
    """
    closed = False
    while state.levels and state.indent > indent:
        _close_level(state, output)
        closed = True
    return closed


def _try_switch_kind(state: ListState, kind: ListKind, indent: int, output: list[str]) -> bool:
    """Close the current container when a sibling item changes list kind.

    Returns:
        bool: True when the container was closed.
    """
    if not state.levels or state.indent != indent or state.kind is kind:
        return False
    _close_level(state, output)
    return True


def _try_open_level(
    state: ListState, kind: ListKind, indent: int, prefix: str, output: list[str]
) -> bool:
    """Open a container when no list is open or the item is indented further.

    Returns:
        bool: True when a new container was opened.
    """
    if state.levels and state.indent >= indent:
        return False
    state.levels.append(ListLevel(kind=kind, indent=indent, prefix=prefix))
    output.append(prefix + kind.open_tag)
    return True


def render_lists(text: str) -> str:
    """Turn ``* item`` and ``1. item`` lines into nested HTML lists.

    Nesting is inferred from indentation deltas between consecutive list
    lines: deeper items open a nested container, shallower ones close
    containers back to their level, and a change of marker kind at the same
    level switches container. Any other line closes every open container, as
    does the end of input, so open and close tags always balance.

    Args:
        text: Document text.

    Returns:
        str: Text with list lines replaced by ``<ul>``/``<ol>``/``<li>`` lines.

    Examples:
        render_lists("* a\\n  * b\\n* c")
    """
    state = ListState()
    output: list[str] = []

    for line in text.split("\n"):
        item = match_list_item(line)
        if item is None:
            _close_all_levels(state, output)
            output.append(line)
            continue

        kind, prefix, content = item
        indent = leading_whitespace_columns(prefix)
        _try_close_deeper_levels(state, indent, output)
        _try_switch_kind(state, kind, indent, output)
        _try_open_level(state, kind, indent, prefix, output)
        output.append(f"{prefix}<li>{content}</li>")

    _close_all_levels(state, output)
    return "\n".join(output)


def _table_separator(row: str) -> str:
    cells = row.split("|")[1:-1]
    return "|" + "|".join("---" for _ in cells) + "|"


def insert_table_separators(text: str) -> str:
    """Insert a Markdown header separator after the first row of every table.

    A table is a run of consecutive ``|...|`` lines; any other line, blank or
    not, ends it.

    Examples:
        insert_table_separators("|a|b|\\n|1|2|")  # "|a|b|\\n|---|---|\\n|1|2|"
    """
    state = TableState()
    output: list[str] = []

    for line in text.split("\n"):
        if not TABLE_ROW_PATTERN.match(line):
            state.in_table = False
            state.separator_added = False
            output.append(line)
            continue

        if not state.in_table:
            state.in_table = True
            state.separator_added = False

        output.append(line)
        if not state.separator_added:
            output.append(_table_separator(line))
            state.separator_added = True

    return "\n".join(output)


def _is_blank(line: str) -> bool:
    return not line.strip()


def _flush_paragraph(state: ParagraphState, output: list[str]) -> None:
    if state.text_lines:
        output.append("<p>" + "\n".join(state.text_lines) + "</p>")
        state.text_lines = []


def _try_block_line(state: ParagraphState, line: str, output: list[str]) -> bool:
    """Emit `line` unwrapped when it belongs to a block-level element.

    Returns:
        bool: True when the line was consumed as block-level content.
    """
    if state.open_blocks == 0 and not BLOCK_START_PATTERN.match(line.lstrip()):
        return False

    _flush_paragraph(state, output)
    output.append(line)
    opened = len(BLOCK_OPEN_PATTERN.findall(line))
    closed = len(BLOCK_CLOSE_PATTERN.findall(line))
    state.open_blocks = max(state.open_blocks + opened - closed, 0)
    return True


def isolate_blocks(text: str) -> str:
    """Move block elements that share a line with other text onto their own lines.

    Examples:
        isolate_blocks("text <div>x</div> more")  # "text\\n<div>x</div>\\nmore"
    """
    text = BLOCK_SPLIT_BEFORE_PATTERN.sub("\n", text)
    return BLOCK_SPLIT_AFTER_PATTERN.sub("\\1\n", text)


def wrap_paragraphs(text: str) -> str:
    """Wrap each blank-line separated run of plain lines in ``<p>``.

    Lines that start a block-level element (headings, rules, tables, divs,
    blockquotes, definition lists, lists, preformatted blocks and protected
    blocks), and every line until such an element closes, are emitted without
    a paragraph around them, so paragraphs never contain block-level
    elements. Block elements embedded in a line of text are split onto their
    own lines first. Blank lines outside blocks are dropped.

    Examples:
        wrap_paragraphs("one\\ntwo\\n\\nthree")  # "<p>one\\ntwo</p>\\n<p>three</p>"
    """
    state = ParagraphState()
    output: list[str] = []

    for line in isolate_blocks(text).split("\n"):
        if state.open_blocks == 0 and _is_blank(line):
            _flush_paragraph(state, output)
            continue
        if _try_block_line(state, line, output):
            continue
        state.text_lines.append(line)

    _flush_paragraph(state, output)
    return "\n".join(output)

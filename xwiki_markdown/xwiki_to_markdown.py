"""XWiki to Markdown conversion."""

from __future__ import annotations

import logging
import re

from . import patterns
from .constants import (
    ADMONITION_LABELS,
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_IMAGE_ALT,
    TOC_MARKDOWN_COMMENT,
    TOC_PLACEHOLDER,
)
from .markdown_to_xwiki import trim_blank_lines
from .scanners import insert_table_separators
from .spans import SpanStash, prepare_source

logger = logging.getLogger(__name__)

BULLET_PATTERN = re.compile(r"^([ \t]*)\* (.*)$", re.MULTILINE)
HEADER_CELL_PATTERN = re.compile(r"(?<=\|)=")


def _protect_code(xwiki: str, stash: SpanStash) -> str:
    def code_block(match: re.Match[str]) -> str:
        language = match.group("lang") or ""
        if language == DEFAULT_CODE_LANGUAGE:
            language = ""
        body = trim_blank_lines(match.group("body"))
        return stash.stash(f"```{language}\n{body}\n```")

    return patterns.CODE_MACRO_PATTERN.sub(code_block, xwiki)


def _quote(label: str, body: str, stash: SpanStash) -> str:
    # Fenced code needs lines of its own, each carrying the quote marker
    token = stash.pattern.pattern
    body = re.sub(rf"(?<=\S)[ \t]*(?={token})", "\n", body.strip())
    body = re.sub(rf"({token})[ \t]*(?=\S)", "\\1\n", body)

    lines = body.split("\n")
    if stash.pattern.fullmatch(lines[0].strip()):
        lines.insert(0, "")
    lines[0] = f"**{label}:** {lines[0]}".rstrip()

    quoted = []
    for line in lines:
        if stash.pattern.fullmatch(line.strip()):
            block = stash.restore(line.strip()).split("\n")
            quoted.append(stash.stash("\n".join(f"> {row}".rstrip() for row in block)))
        else:
            quoted.append(f"> {line}".rstrip())
    return "\n".join(quoted)


def _convert_macros(xwiki: str, stash: SpanStash) -> str:
    for kind, pattern in patterns.ADMONITION_PATTERNS.items():
        label = ADMONITION_LABELS[kind]
        xwiki = pattern.sub(lambda m, label=label: _quote(label, m.group(1), stash), xwiki)

    # The TOC is not regenerated in Markdown; its placeholder comment is kept verbatim
    xwiki = xwiki.replace(TOC_PLACEHOLDER, stash.stash(TOC_MARKDOWN_COMMENT))
    xwiki = patterns.MONOSPACE_PATTERN.sub(lambda m: stash.stash(f"`{m.group(1)}`"), xwiki)
    return patterns.INLINE_CODE_PATTERN.sub(lambda m: stash.stash(f"`{m.group(1)}`"), xwiki)


def _convert_headings(xwiki: str) -> str:
    for level, pattern in patterns.HEADING_PATTERNS:
        xwiki = pattern.sub(lambda m, level=level: f"{'#' * level} {m.group(1)}", xwiki)
    return xwiki


def _convert_formatting(xwiki: str) -> str:
    xwiki = patterns.BOLD_ITALIC_PATTERN.sub(r"***\1***", xwiki)
    xwiki = patterns.BOLD_PATTERN.sub(r"**\1**", xwiki)
    xwiki = patterns.ITALIC_PATTERN.sub(r"*\1*", xwiki)
    xwiki = patterns.STRIKETHROUGH_PATTERN.sub(r"~~\1~~", xwiki)
    # Markdown has no syntax for these; inline HTML is the portable fallback
    xwiki = patterns.UNDERLINE_PATTERN.sub(r"<u>\1</u>", xwiki)
    xwiki = patterns.SUPERSCRIPT_PATTERN.sub(r"<sup>\1</sup>", xwiki)
    xwiki = patterns.SUBSCRIPT_PATTERN.sub(r"<sub>\1</sub>", xwiki)
    return patterns.STYLED_SPAN_PATTERN.sub(r'<span style="\1">\2</span>', xwiki)


def _convert_references(xwiki: str) -> str:
    xwiki = patterns.LINK_PATTERN.sub(r"[\1](\2)", xwiki)
    xwiki = patterns.IMAGE_WITH_ALT_PATTERN.sub(r"![\2](\1)", xwiki)
    return patterns.IMAGE_PATTERN.sub(rf"![{DEFAULT_IMAGE_ALT}](\1)", xwiki)


def _convert_line_structures(xwiki: str) -> str:
    xwiki = patterns.DEFINITION_PATTERN.sub(
        lambda m: f"**{m.group(1).strip()}**: {m.group(2).strip()}".rstrip(), xwiki
    )
    return patterns.LINE_BREAK_PATTERN.sub("  ", xwiki)


def _convert_tables(xwiki: str) -> str:
    xwiki = patterns.TABLE_ROW_PATTERN.sub(
        lambda m: HEADER_CELL_PATTERN.sub("", m.group(0)).rstrip(), xwiki
    )
    return insert_table_separators(xwiki)


def _convert_lists(xwiki: str) -> str:
    # Ordered items keep their literal "1." and rely on Markdown renumbering
    return BULLET_PATTERN.sub(r"\1- \2", xwiki)


def convert_xwiki_to_markdown(xwiki: str) -> str:
    """Convert XWiki 2.x syntax to Markdown.

    Passes run in a fixed order: code macros are captured first, then the
    other macros, headings (deepest first), inline formatting, links and
    images, definition lists and line breaks, tables, horizontal rules and
    lists. Rules are normalised after tables so a dash rule is never read as
    a table separator. Never raises; unrecognised syntax is passed through.

    Args:
        xwiki: XWiki document.

    Returns:
        str: Markdown document.

    Examples:
        convert_xwiki_to_markdown("== Setup ==\\n\\n|a|b|\\n|1|2|")
        # "## Setup\\n\\n|a|b|\\n|---|---|\\n|1|2|"
    """
    stash = SpanStash("C")
    markdown = prepare_source(xwiki)
    markdown = _protect_code(markdown, stash)
    markdown = _convert_macros(markdown, stash)
    markdown = _convert_headings(markdown)
    markdown = _convert_formatting(markdown)
    markdown = _convert_references(markdown)
    markdown = _convert_line_structures(markdown)
    markdown = _convert_tables(markdown)
    markdown = patterns.RULE_PATTERN.sub("---", markdown)
    markdown = _convert_lists(markdown)
    logger.debug("Converted XWiki with %d protected spans", len(stash))
    return stash.restore(markdown)

"""Markdown to XWiki conversion."""

from __future__ import annotations

import logging
import re

from .constants import DEFAULT_CODE_LANGUAGE
from .spans import SpanStash, prepare_source

logger = logging.getLogger(__name__)

FENCED_CODE_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[\w+#.-]*)[^\n]*\n(?P<body>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
INLINE_CODE_PATTERN = re.compile(r"`([^`\n]+)`")
HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)
RULE_PATTERN = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})[ \t]*$", re.MULTILINE)
BOLD_ITALIC_PATTERN = re.compile(r"\*\*\*(.+?)\*\*\*")
UNDERSCORE_ITALIC_PATTERN = re.compile(r"(?<!\w)_(?![\s_])([^_\n]+?)(?<![\s_])_(?!\w)")
UNDERSCORE_BOLD_PATTERN = re.compile(r"(?<!\w)__(?![\s_])(.+?)(?<![\s_])__(?!\w)")
ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?![\s*])([^*\n]+?)(?<![\s*])\*(?!\*)")
STRIKETHROUGH_PATTERN = re.compile(r"~~(.+?)~~")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
BULLET_PATTERN = re.compile(r"^([ \t]*)[-*+] (.*)$", re.MULTILINE)
ORDERED_PATTERN = re.compile(r"^([ \t]*)\d+[.)] (.*)$", re.MULTILINE)
TABLE_SEPARATOR_PATTERN = re.compile(r"^\|(?:[ \t]*:?-+:?[ \t]*\|)+[ \t]*(?:\n|$)", re.MULTILINE)
TABLE_ROW_PATTERN = re.compile(r"^\|(.+)\|[ \t]*$", re.MULTILINE)


def trim_blank_lines(text: str) -> str:
    """Drop blank lines at the start and end of `text`, keeping indentation.

    Examples:
        trim_blank_lines("\\n  code\\n\\n")  # "  code"
    """
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def _protect_code(markdown: str, stash: SpanStash) -> str:
    def fenced(match: re.Match[str]) -> str:
        language = match.group("lang") or DEFAULT_CODE_LANGUAGE
        body = trim_blank_lines(match.group("body"))
        return stash.stash(f'{{{{code language="{language}"}}}}\n{body}\n{{{{/code}}}}')

    markdown = FENCED_CODE_PATTERN.sub(fenced, markdown)
    return INLINE_CODE_PATTERN.sub(lambda m: stash.stash(f"##{m.group(1)}##"), markdown)


def _convert_headings_and_rules(markdown: str) -> str:
    def heading(match: re.Match[str]) -> str:
        marker = "=" * len(match.group(1))
        return f"{marker} {match.group(2)} {marker}"

    markdown = HEADING_PATTERN.sub(heading, markdown)
    return RULE_PATTERN.sub("----", markdown)


def _convert_emphasis(markdown: str) -> str:
    # Longest marker first: the single-star rule must never see pieces of ** or ***
    markdown = BOLD_ITALIC_PATTERN.sub(r"**//\1//**", markdown)
    # Bold is spelled the same in both dialects; XWiki "__" is underline
    markdown = UNDERSCORE_BOLD_PATTERN.sub(r"**\1**", markdown)
    markdown = ITALIC_PATTERN.sub(r"//\1//", markdown)
    markdown = UNDERSCORE_ITALIC_PATTERN.sub(r"//\1//", markdown)
    return STRIKETHROUGH_PATTERN.sub(r"--\1--", markdown)


def _convert_links(markdown: str) -> str:
    markdown = IMAGE_PATTERN.sub(r"[[image:\2]]", markdown)
    return LINK_PATTERN.sub(r"[[\1>>\2]]", markdown)


def _convert_lists(markdown: str) -> str:
    markdown = BULLET_PATTERN.sub(r"\1* \2", markdown)
    return ORDERED_PATTERN.sub(r"\g<1>1. \2", markdown)


def _convert_tables(markdown: str) -> str:
    markdown = TABLE_SEPARATOR_PATTERN.sub("", markdown)

    def row(match: re.Match[str]) -> str:
        cells = [cell.strip() for cell in match.group(1).split("|")]
        return "|" + "|".join(cells) + "|"

    return TABLE_ROW_PATTERN.sub(row, markdown)


def convert_markdown_to_xwiki(markdown: str) -> str:
    """Convert Markdown text to XWiki 2.x syntax.

    Passes run in a fixed order: code is captured first so no later pass
    rewrites it, then headings, emphasis, images before links, lists and
    tables. Never raises; unrecognised syntax is passed through.

    Args:
        markdown: Markdown document.

    Returns:
        str: XWiki document.

    Examples:
        convert_markdown_to_xwiki("## Setup\\n\\nRun *this*.")
        # "== Setup ==\\n\\nRun //this//."
    """
    stash = SpanStash("C")
    xwiki = prepare_source(markdown)
    xwiki = _protect_code(xwiki, stash)
    xwiki = _convert_headings_and_rules(xwiki)
    xwiki = _convert_emphasis(xwiki)
    xwiki = _convert_links(xwiki)
    xwiki = _convert_lists(xwiki)
    xwiki = _convert_tables(xwiki)
    logger.debug("Converted Markdown with %d protected code spans", len(stash))
    return stash.restore(xwiki)

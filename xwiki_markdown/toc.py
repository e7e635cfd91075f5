"""Table of contents generation for the HTML preview."""

from __future__ import annotations

import re

from .constants import TOC_PLACEHOLDER, TOC_TITLE
from .models import TocEntry

RENDERED_HEADING_PATTERN = re.compile(r"<h([1-6])>(.*?)</h\1>")
TAG_PATTERN = re.compile(r"<[^>]+>")


def extract_toc_entries(html: str) -> list[TocEntry]:
    """Collect rendered ``<hN>`` headings in document order.

    Inline markup inside a heading is dropped from the entry text.

    Examples:
        extract_toc_entries("<h1>Intro</h1>\\n<h2>Setup</h2>")
        # [TocEntry(1, "Intro"), TocEntry(2, "Setup")]
    """
    return [
        TocEntry(level=int(match.group(1)), text=TAG_PATTERN.sub("", match.group(2)).strip())
        for match in RENDERED_HEADING_PATTERN.finditer(html)
    ]


def format_toc_entries(entries: list[TocEntry], indent_chars: str = "  ") -> str:
    """Render entries as an outline, indented by ``level - 1``.

    Examples:
        format_toc_entries([TocEntry(1, "A"), TocEntry(2, "B")])  # "• A\\n  • B"
    """
    return "\n".join(f"{indent_chars * (entry.level - 1)}• {entry.text}" for entry in entries)


def expand_toc(html: str) -> str:
    """Replace TOC placeholders with an outline of the rendered headings.

    Must run after headings are rendered. Documents without a placeholder are
    returned unchanged.

    Examples:
        expand_toc("{{toc/}}\\n<h1>A</h1>")
    """
    if TOC_PLACEHOLDER not in html:
        return html

    outline = format_toc_entries(extract_toc_entries(html))
    body = f"{TOC_TITLE}\n{outline}" if outline else TOC_TITLE
    return html.replace(TOC_PLACEHOLDER, f'<div class="toc">{body}</div>')

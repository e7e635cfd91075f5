"""XWiki to HTML rendering for live preview."""

from __future__ import annotations

import html
import logging
import re

from . import patterns
from .constants import ADMONITION_ICONS, DEFAULT_CODE_LANGUAGE, DEFAULT_IMAGE_ALT
from .highlight import HIGHLIGHTERS
from .images import LocationHint, resolve_image_path
from .markdown_to_xwiki import trim_blank_lines
from .scanners import render_lists, wrap_paragraphs
from .spans import SpanStash, prepare_source
from .toc import expand_toc

logger = logging.getLogger(__name__)

BLOCKQUOTE_SENTINEL = "\x00Q:"
BLOCKQUOTE_RUN_PATTERN = re.compile(
    rf"^{BLOCKQUOTE_SENTINEL}[^\n]*(?:\n{BLOCKQUOTE_SENTINEL}[^\n]*)*", re.MULTILINE
)
TABLE_RUN_PATTERN = re.compile(r"^<tr>.*</tr>(?:\n<tr>.*</tr>)*$", re.MULTILINE)
DEFINITION_RUN_PATTERN = re.compile(r"^<dt>.*</dd>(?:\n<dt>.*</dd>)*$", re.MULTILINE)


def _render_rules_and_headings(text: str) -> str:
    text = patterns.RULE_PATTERN.sub("<hr>", text)
    for level, pattern in patterns.HEADING_PATTERNS:
        text = pattern.sub(rf"<h{level}>\1</h{level}>", text)
    return text


def render_code_block(language: str, body: str) -> str:
    """Render a code macro body as a ``pre/code`` element.

    The body is HTML-escaped; languages with a highlighter get token markup.

    Examples:
        render_code_block("javascript", "return 1;")
    """
    code = html.escape(trim_blank_lines(body), quote=False)
    highlighter = HIGHLIGHTERS.get(language)
    if highlighter is not None:
        code = highlighter(code)
    return f'<pre><code class="language-{html.escape(language)}">{code}</code></pre>'


def _render_code(text: str, blocks: SpanStash, inline: SpanStash) -> str:
    text = patterns.CODE_MACRO_PATTERN.sub(
        lambda m: blocks.stash(
            render_code_block(m.group("lang") or DEFAULT_CODE_LANGUAGE, m.group("body"))
        ),
        text,
    )
    text = patterns.MONOSPACE_PATTERN.sub(
        lambda m: inline.stash(f'<code class="monospace">{html.escape(m.group(1))}</code>'),
        text,
    )
    return patterns.INLINE_CODE_PATTERN.sub(
        lambda m: inline.stash(f"<code>{html.escape(m.group(1))}</code>"), text
    )


def _render_admonitions(text: str) -> str:
    for kind, pattern in patterns.ADMONITION_PATTERNS.items():
        icon = ADMONITION_ICONS[kind]
        text = pattern.sub(rf'<div class="{kind}-box">{icon} \1</div>', text)
    return text


def _render_formatting(text: str) -> str:
    text = patterns.BOLD_ITALIC_PATTERN.sub(r"<strong><em>\1</em></strong>", text)
    text = patterns.BOLD_PATTERN.sub(r"<strong>\1</strong>", text)
    text = patterns.ITALIC_PATTERN.sub(r"<em>\1</em>", text)
    text = patterns.STRIKETHROUGH_PATTERN.sub(r"<del>\1</del>", text)
    text = patterns.UNDERLINE_PATTERN.sub(r"<u>\1</u>", text)
    text = patterns.SUPERSCRIPT_PATTERN.sub(r"<sup>\1</sup>", text)
    text = patterns.SUBSCRIPT_PATTERN.sub(r"<sub>\1</sub>", text)
    return patterns.STYLED_SPAN_PATTERN.sub(r'<span style="\1">\2</span>', text)


def _image(src: str, alt: str, location: LocationHint | None) -> str:
    resolved = html.escape(resolve_image_path(src.strip(), location))
    return f'<img src="{resolved}" alt="{html.escape(alt)}" />'


def _render_images(text: str, location: LocationHint | None) -> str:
    text = patterns.IMAGE_WITH_ALT_PATTERN.sub(
        lambda m: _image(m.group(1), m.group(2), location), text
    )
    return patterns.IMAGE_PATTERN.sub(
        lambda m: _image(m.group(1), DEFAULT_IMAGE_ALT, location), text
    )


def _render_links(text: str) -> str:
    return patterns.LINK_PATTERN.sub(
        lambda m: f'<a href="{html.escape(m.group(2).strip())}">{m.group(1)}</a>', text
    )


def _render_blockquotes(text: str) -> str:
    # A line pattern cannot express "one element per run", so tag lines first
    text = patterns.BLOCKQUOTE_PATTERN.sub(rf"{BLOCKQUOTE_SENTINEL}\1", text)

    def merge(match: re.Match[str]) -> str:
        lines = [line[len(BLOCKQUOTE_SENTINEL) :] for line in match.group(0).split("\n")]
        return f"<blockquote>{'<br>'.join(lines)}</blockquote>"

    return BLOCKQUOTE_RUN_PATTERN.sub(merge, text)


def _render_definitions(text: str) -> str:
    return patterns.DEFINITION_PATTERN.sub(r"<dt>\1</dt><dd>\2</dd>", text)


def _render_tables(text: str) -> str:
    def row(match: re.Match[str]) -> str:
        cells = []
        for cell in match.group(1).split("|"):
            cell = cell.strip()
            if cell.startswith("="):
                cells.append(f"<th>{cell[1:].strip()}</th>")
            else:
                cells.append(f"<td>{cell}</td>")
        return f"<tr>{''.join(cells)}</tr>"

    text = patterns.TABLE_ROW_PATTERN.sub(row, text)
    text = TABLE_RUN_PATTERN.sub(r"<table>\g<0></table>", text)
    return DEFINITION_RUN_PATTERN.sub(r"<dl>\g<0></dl>", text)


def render_xwiki_html(xwiki: str, location: LocationHint | None = None) -> str:
    """Render an XWiki document as an HTML fragment for preview.

    Passes run in a fixed order; later passes rely on the markup earlier ones
    produce. Code is captured first so its body is never rewritten, rules
    and headings follow, and the table of contents is generated from the rendered
    headings before lists, tables and paragraphs are built. Never raises;
    unrecognised syntax is passed through.

    Args:
        xwiki: XWiki document.
        location: Location of the document, used only to resolve relative
            image paths. Without it image paths are emitted unchanged.

    Returns:
        str: HTML fragment to embed in a preview page.

    Examples:
        render_xwiki_html("= Title =\\n\\nSome **bold** text.")
        # "<h1>Title</h1>\\n<p>Some <strong>bold</strong> text.</p>"
    """
    blocks = SpanStash("B")
    inline = SpanStash("I")

    text = prepare_source(xwiki)
    text = _render_code(text, blocks, inline)
    text = _render_rules_and_headings(text)
    text = _render_admonitions(text)
    text = _render_formatting(text)
    text = _render_images(text, location)
    text = _render_links(text)
    text = _render_blockquotes(text)
    text = _render_definitions(text)
    text = expand_toc(text)
    text = patterns.LINE_BREAK_PATTERN.sub("<br>", text)
    text = render_lists(text)
    text = _render_tables(text)
    text = wrap_paragraphs(text)

    logger.debug(
        "Rendered XWiki with %d code blocks and %d inline code spans", len(blocks), len(inline)
    )
    return blocks.restore(inline.restore(text))

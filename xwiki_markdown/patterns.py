"""XWiki syntax patterns shared by the Markdown converter and the HTML renderer."""

from __future__ import annotations

import re

from .constants import ADMONITION_KINDS, HEADING_LEVELS

CODE_MACRO_PATTERN = re.compile(
    r'\{\{code(?:\s+language="(?P<lang>[^"]*)")?\s*\}\}(?P<body>.*?)\{\{/code\}\}', re.DOTALL
)
MONOSPACE_PATTERN = re.compile(r"\{\{monospace\}\}(.*?)\{\{/monospace\}\}")
INLINE_CODE_PATTERN = re.compile(r"##(.+?)##")
ADMONITION_PATTERNS = {
    kind: re.compile(rf"\{{\{{{kind}\}}\}}(.*?)\{{\{{/{kind}\}}\}}", re.DOTALL)
    for kind in ADMONITION_KINDS
}

RULE_PATTERN = re.compile(r"^----+[ \t]*$", re.MULTILINE)
HEADING_PATTERNS = tuple(
    (level, re.compile(rf"^{'=' * level} (.*?) {'=' * level}[ \t]*$", re.MULTILINE))
    for level in HEADING_LEVELS
)

# Emphasis family, longest marker first. Italic ignores "//" right after a
# colon so URLs are left alone; strikethrough never spans a run of dashes.
BOLD_ITALIC_PATTERN = re.compile(r"\*\*\*?//(.*?)//\*?\*\*")
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"(?<!:)//(.*?)(?<!:)//")
STRIKETHROUGH_PATTERN = re.compile(r"--(?!-)(.+?)(?<!-)--")
UNDERLINE_PATTERN = re.compile(r"__(.*?)__")
SUPERSCRIPT_PATTERN = re.compile(r"\^\^(.*?)\^\^")
SUBSCRIPT_PATTERN = re.compile(r",,(.*?),,")
STYLED_SPAN_PATTERN = re.compile(r'\(% style="([^"]+)" %\)(.*?)\(%%\)')

IMAGE_WITH_ALT_PATTERN = re.compile(r'\[\[image:([^|\]]+)\|\|alt="([^"]*?)"\]\]')
IMAGE_PATTERN = re.compile(r"\[\[image:([^|\]]+)(?:\|\|[^\]]*)?\]\]")
LINK_PATTERN = re.compile(r"\[\[([^>\]]+)>>([^\]]+)\]\]")

BLOCKQUOTE_PATTERN = re.compile(r"^> (.*)$", re.MULTILINE)
DEFINITION_PATTERN = re.compile(r"^;([^:\n]+):(.*)$", re.MULTILINE)
LINE_BREAK_PATTERN = re.compile(r"\\\\$", re.MULTILINE)
TABLE_ROW_PATTERN = re.compile(r"^\|(.+)\|[ \t]*$", re.MULTILINE)

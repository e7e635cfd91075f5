"""Lexical highlighting for code blocks in the HTML preview."""

from __future__ import annotations

import re

from .constants import JAVASCRIPT_KEYWORDS
from .spans import SpanStash

KEYWORD_PATTERN = re.compile(rf"\b({'|'.join(JAVASCRIPT_KEYWORDS)})\b")
FUNCTION_PATTERN = re.compile(r"\b([a-zA-Z_$][a-zA-Z0-9_$]*)(\s*)\(")
STRING_PATTERN = re.compile(r"(['\"`])([^'\"`]*?)\1")
COMMENT_PATTERN = re.compile(r"//.*$", re.MULTILINE)
NUMBER_PATTERN = re.compile(r"\b\d+\b")


def _token(stash: SpanStash, kind: str, text: str) -> str:
    return stash.stash(f'<span class="token {kind}">{text}</span>')


def highlight_javascript(code: str) -> str:
    """Wrap JavaScript tokens in ``<span class="token ...">`` elements.

    Keywords, call-site function names, quoted strings, line comments and
    integer literals are tagged in that order. Each pass hides the markup it
    produced from the passes after it, so a tag attribute is never re-tagged.
    Text that a later pattern covers may still hold an earlier token, e.g. a
    keyword inside a string literal stays tagged as a keyword.

    Args:
        code: HTML-escaped source code.

    Returns:
        str: Code with highlighting markup.

    Examples:
        highlight_javascript("return 42;")
    """
    stash = SpanStash("H")
    code = KEYWORD_PATTERN.sub(lambda m: _token(stash, "keyword", m.group(1)), code)
    code = FUNCTION_PATTERN.sub(
        lambda m: _token(stash, "function", m.group(1)) + m.group(2) + "(", code
    )
    code = STRING_PATTERN.sub(lambda m: _token(stash, "string", m.group(0)), code)
    code = COMMENT_PATTERN.sub(lambda m: _token(stash, "comment", m.group(0)), code)
    code = NUMBER_PATTERN.sub(lambda m: _token(stash, "number", m.group(0)), code)
    return stash.restore(code)


HIGHLIGHTERS = {
    "javascript": highlight_javascript,
}

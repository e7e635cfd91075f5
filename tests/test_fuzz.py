from __future__ import annotations

import os

import pytest

from xwiki_markdown.markdown_to_xwiki import convert_markdown_to_xwiki
from xwiki_markdown.renderer import render_xwiki_html
from xwiki_markdown.xwiki_to_markdown import convert_xwiki_to_markdown

atheris = pytest.importorskip("atheris")

MARKUP_FRAGMENTS = [
    "= ",
    " =",
    "**",
    "//",
    "--",
    "##",
    "{{code}}",
    "{{/code}}",
    "{{toc/}}",
    "[[image:",
    ">>",
    "]]",
    "|",
    "|=",
    "* ",
    "1. ",
    "> ",
    ";",
    "\\\\",
    "\n",
    "```",
    "`",
    "~~",
    "- ",
]


def test_converters_with_fuzzed_text():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    converted = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        assert isinstance(convert_markdown_to_xwiki(text), str)
        assert isinstance(convert_xwiki_to_markdown(text), str)
        assert isinstance(render_xwiki_html(text), str)
        converted += 1

    assert converted  # ensure we exercised the loop


def test_renderer_with_fuzzed_markup():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    pieces: list[str] = []

    while provider.remaining_bytes() > 0 and len(pieces) < 256:
        if provider.ConsumeBool():
            pieces.append(provider.PickValueInList(MARKUP_FRAGMENTS))
        else:
            pieces.append(provider.ConsumeUnicodeNoSurrogates(8))

    html = render_xwiki_html("".join(pieces))

    for tag in ("ul", "ol"):
        assert html.count(f"<{tag}>") == html.count(f"</{tag}>")

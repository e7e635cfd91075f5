from __future__ import annotations

import re
import string

from hypothesis import given
from hypothesis import strategies as st

from xwiki_markdown.markdown_to_xwiki import convert_markdown_to_xwiki
from xwiki_markdown.renderer import render_xwiki_html
from xwiki_markdown.scanners import render_lists
from xwiki_markdown.xwiki_to_markdown import convert_xwiki_to_markdown

plain_line = st.text(alphabet=string.ascii_letters + " ", min_size=1, max_size=30).filter(
    lambda line: line.strip()
)
plain_paragraph = st.lists(plain_line, min_size=1, max_size=4)
title_strategy = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=20)


@given(st.text())
def test_markdown_conversion_never_raises(text: str):
    assert isinstance(convert_markdown_to_xwiki(text), str)


@given(st.text())
def test_xwiki_conversion_never_raises(text: str):
    assert isinstance(convert_xwiki_to_markdown(text), str)


@given(st.text())
def test_rendering_never_raises(text: str):
    assert isinstance(render_xwiki_html(text), str)


@given(st.text(alphabet="*1. \n\tab", max_size=80))
def test_rendered_lists_are_balanced(text: str):
    html = render_lists(text)

    for tag in ("ul", "ol"):
        assert html.count(f"<{tag}>") == html.count(f"</{tag}>")


@given(st.lists(plain_paragraph, min_size=1, max_size=5))
def test_plain_paragraphs_are_wrapped_once_each(paragraphs: list[list[str]]):
    xwiki = "\n\n".join("\n".join(lines) for lines in paragraphs)

    html = render_xwiki_html(xwiki)

    assert html.count("<p>") == len(paragraphs)
    assert html.count("</p>") == len(paragraphs)
    tags = re.findall(r"</?p>", html)
    assert tags == ["<p>", "</p>"] * len(paragraphs)


@given(st.integers(min_value=1, max_value=6), title_strategy)
def test_heading_depth_survives_round_trip(level: int, title: str):
    markdown = f"{'#' * level} {title}"

    xwiki = convert_markdown_to_xwiki(markdown)

    assert xwiki == f"{'=' * level} {title} {'=' * level}"
    assert convert_xwiki_to_markdown(xwiki) == markdown


@given(st.lists(title_strategy, min_size=1, max_size=8))
def test_bullet_order_survives_round_trip(items: list[str]):
    markdown = "\n".join(f"- {item}" for item in items)

    assert convert_xwiki_to_markdown(convert_markdown_to_xwiki(markdown)) == markdown

from __future__ import annotations

import re
import textwrap

import pytest

from xwiki_markdown.constants import TOC_TITLE
from xwiki_markdown.images import LocationHint
from xwiki_markdown.renderer import render_code_block, render_xwiki_html


def _render(xwiki: str, location: LocationHint | None = None) -> str:
    return render_xwiki_html(textwrap.dedent(xwiki).strip("\n"), location)


def test_headings_are_not_wrapped_in_paragraphs():
    assert render_xwiki_html("= A =\n\n== B ==") == "<h1>A</h1>\n<h2>B</h2>"


def test_paragraph_with_bold():
    assert render_xwiki_html("Some **bold** text.") == "<p>Some <strong>bold</strong> text.</p>"


def test_paragraphs_split_on_blank_lines():
    assert render_xwiki_html("a\nb\n\n\nc") == "<p>a\nb</p>\n<p>c</p>"


def test_block_element_splits_a_paragraph():
    assert render_xwiki_html("intro\n= T =\noutro") == (
        "<p>intro</p>\n<h1>T</h1>\n<p>outro</p>"
    )


def test_horizontal_rule():
    assert render_xwiki_html("before\n\n----\n\nafter") == "<p>before</p>\n<hr>\n<p>after</p>"


def test_javascript_code_block_is_highlighted():
    result = render_xwiki_html('{{code language="javascript"}}\nconst x = 1;\n{{/code}}')

    assert result == (
        '<pre><code class="language-javascript">'
        '<span class="token keyword">const</span> x = <span class="token number">1</span>;'
        "</code></pre>"
    )


def test_code_block_body_is_escaped_and_not_formatted():
    result = render_xwiki_html('{{code language="python"}}\n**not bold** <tag>\n{{/code}}')

    assert result == '<pre><code class="language-python">**not bold** &lt;tag&gt;</code></pre>'


def test_code_block_with_blank_lines_stays_one_block():
    result = render_xwiki_html('{{code language="none"}}\na\n\nb\n{{/code}}')

    assert result == '<pre><code class="language-none">a\n\nb</code></pre>'


def test_heading_markup_inside_code_is_kept():
    result = render_xwiki_html("{{code}}\n= x =\n----\n{{/code}}")

    assert result == '<pre><code class="language-none">= x =\n----</code></pre>'


def test_render_code_block_without_highlighter():
    assert render_code_block("python", "\nif a < b:\n") == (
        '<pre><code class="language-python">if a &lt; b:</code></pre>'
    )


@pytest.mark.parametrize(
    ("kind", "icon"), [("info", "ℹ️"), ("warning", "⚠️"), ("error", "❌")]
)
def test_admonitions(kind: str, icon: str):
    result = render_xwiki_html(f"{{{{{kind}}}}}Heads up{{{{/{kind}}}}}")

    assert result == f'<div class="{kind}-box">{icon} Heads up</div>'


def test_inline_formatting():
    result = render_xwiki_html("//i// --s-- __u__ ^^p^^ ,,b,, ##c##")

    assert result == (
        "<p><em>i</em> <del>s</del> <u>u</u> <sup>p</sup> <sub>b</sub> <code>c</code></p>"
    )


def test_bold_italic():
    assert render_xwiki_html("**//x//**") == "<p><strong><em>x</em></strong></p>"


def test_inline_code_is_escaped_and_protected():
    assert render_xwiki_html("##<b>**x**</b>##") == "<p><code>&lt;b&gt;**x**&lt;/b&gt;</code></p>"


def test_monospace():
    assert render_xwiki_html("{{monospace}}a//b//{{/monospace}}") == (
        '<p><code class="monospace">a//b//</code></p>'
    )


def test_styled_span():
    assert render_xwiki_html('(% style="color:red" %)warn(%%)') == (
        '<p><span style="color:red">warn</span></p>'
    )


def test_web_image_passes_through():
    assert render_xwiki_html("[[image:https://x/y.png]]") == (
        '<p><img src="https://x/y.png" alt="Image" /></p>'
    )


def test_relative_image_is_resolved_with_location():
    location = LocationHint("/ws/docs/page.xwiki", workspace_root="/ws")

    result = render_xwiki_html('[[image:./img/a.png||alt="Diagram"]]', location)

    assert result == '<p><img src="file:///ws/docs/img/a.png" alt="Diagram" /></p>'


def test_relative_image_without_location_is_kept():
    assert render_xwiki_html("[[image:img/a.png]]") == (
        '<p><img src="img/a.png" alt="Image" /></p>'
    )


def test_link():
    assert render_xwiki_html("[[Docs>>https://example.org]]") == (
        '<p><a href="https://example.org">Docs</a></p>'
    )


def test_consecutive_quote_lines_form_one_blockquote():
    assert render_xwiki_html("> one\n> two\nafter") == (
        "<blockquote>one<br>two</blockquote>\n<p>after</p>"
    )


def test_definition_list():
    assert render_xwiki_html(";Term:Meaning\n;Other:Thing") == (
        "<dl><dt>Term</dt><dd>Meaning</dd>\n<dt>Other</dt><dd>Thing</dd></dl>"
    )


def test_nested_unordered_list_is_balanced():
    result = _render(
        """
        * a
          * b
        * c
        """
    )

    assert result == "<ul>\n<li>a</li>\n  <ul>\n  <li>b</li>\n  </ul>\n<li>c</li>\n</ul>"


def test_list_kind_switch_closes_previous_container():
    assert render_xwiki_html("1. one\n* two") == (
        "<ol>\n<li>one</li>\n</ol>\n<ul>\n<li>two</li>\n</ul>"
    )


def test_list_followed_by_paragraph():
    assert render_xwiki_html("* a\n\ntext") == "<ul>\n<li>a</li>\n</ul>\n<p>text</p>"


def test_table_with_header_cells():
    result = render_xwiki_html("|=Name|=Age|\n|Ann|30|\n\ntext")

    assert result == (
        "<table><tr><th>Name</th><th>Age</th></tr>\n"
        "<tr><td>Ann</td><td>30</td></tr></table>\n"
        "<p>text</p>"
    )


def test_tables_separated_by_blank_line_are_distinct():
    result = render_xwiki_html("|a|\n\n|b|")

    assert result.count("<table>") == 2
    assert result.count("</table>") == 2


def test_toc_lists_headings_in_order():
    result = _render(
        """
        {{toc/}}
        = A =
        == B ==
        = C =
        """
    )

    assert f'<div class="toc">{TOC_TITLE}\n• A\n  • B\n• C</div>' in result
    assert result.index('<div class="toc">') < result.index("<h1>A</h1>")


def test_toc_without_headings_shows_title_only():
    assert render_xwiki_html("{{toc/}}") == f'<div class="toc">{TOC_TITLE}</div>'


def test_toc_entry_drops_inline_markup():
    result = render_xwiki_html("{{toc/}}\n= **Bold** title =")

    assert "• Bold title</div>" in result


def test_line_break():
    assert render_xwiki_html("one\\\\\ntwo") == "<p>one<br>\ntwo</p>"


def test_paragraphs_never_contain_block_elements():
    result = _render(
        """
        Intro line
        = Heading =
        * item
        |cell|
        > quote
        {{info}}note{{/info}}
        Outro line
        """
    )

    for paragraph in re.findall(r"<p>(.*?)</p>", result, re.DOTALL):
        assert not re.search(r"<(?:h\d|ul|ol|li|table|tr|blockquote|div|pre|dl)\b", paragraph)


def test_crlf_input():
    assert render_xwiki_html("= A =\r\ntext\r\n") == "<h1>A</h1>\n<p>text</p>"


@pytest.mark.parametrize(
    "xwiki",
    ["", "{{code}}unterminated", "[[image:]]", "|", "> ", ";:", "**", "{{toc/}}{{toc/}}"],
)
def test_malformed_input_never_raises(xwiki: str):
    assert isinstance(render_xwiki_html(xwiki), str)


def test_code_macro_inside_a_line_is_not_wrapped_in_paragraph():
    assert render_xwiki_html("text {{code}}x{{/code}} more") == (
        '<p>text</p>\n<pre><code class="language-none">x</code></pre>\n<p>more</p>'
    )


def test_toc_placeholder_after_text_is_not_wrapped_in_paragraph():
    assert render_xwiki_html("Intro {{toc/}}\n\n= A =") == (
        f'<p>Intro</p>\n<div class="toc">{TOC_TITLE}\n• A</div>\n<h1>A</h1>'
    )


def test_admonition_inside_a_line_is_not_wrapped_in_paragraph():
    assert render_xwiki_html("See {{info}}note{{/info}} here") == (
        '<p>See</p>\n<div class="info-box">ℹ️ note</div>\n<p>here</p>'
    )

from __future__ import annotations

import pytest

from xwiki_markdown.spans import SpanStash, prepare_source


def test_prepare_source_normalises_line_endings():
    assert prepare_source("a\r\nb\rc\n") == "a\nb\nc\n"


def test_prepare_source_drops_reserved_character():
    assert prepare_source("a\x00b") == "ab"


def test_stash_and_restore():
    stash = SpanStash("C")
    token = stash.stash("`**x**`")

    assert "*" not in token
    assert len(stash) == 1
    assert stash.restore(f"see {token}") == "see `**x**`"


def test_nested_tokens_are_restored():
    stash = SpanStash("H")
    inner = stash.stash("<b>inner</b>")
    outer = stash.stash(f"[{inner}]")

    assert stash.restore(outer) == "[<b>inner</b>]"


def test_unknown_index_is_left_untouched():
    stash = SpanStash("C")

    assert stash.restore("\x00C5\x00") == "\x00C5\x00"


def test_independent_stashes_do_not_collide():
    blocks = SpanStash("B")
    inline = SpanStash("I")
    text = f"{blocks.stash('block')} {inline.stash('inline')}"

    assert blocks.restore(text) == "block \x00I0\x00"
    assert inline.restore(blocks.restore(text)) == "block inline"


def test_restore_terminates_on_self_reference():
    stash = SpanStash("C")
    stash.stash("\x00C0\x00")

    assert stash.restore("\x00C0\x00") == "\x00C0\x00"


@pytest.mark.parametrize("kind", ["", "AB", "1", "\x00"])
def test_kind_must_be_a_single_letter(kind: str):
    with pytest.raises(ValueError):
        SpanStash(kind)

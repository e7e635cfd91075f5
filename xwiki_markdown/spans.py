"""Protected spans shared by the rewrite pipelines."""

from __future__ import annotations

import re

_RESERVED = "\x00"


def prepare_source(text: str) -> str:
    """Normalise line endings and drop the character reserved for span tokens.

    Examples:
        prepare_source("a\\r\\nb")  # "a\\nb"
    """
    return text.replace(_RESERVED, "").replace("\r\n", "\n").replace("\r", "\n")


class SpanStash:
    """Hide captured text behind opaque tokens for one pipeline run.

    Tokens look like ``\\x00C3\\x00``. They contain no markup characters and no
    digit that starts at a word boundary, so none of the rewrite patterns can
    match inside them. A span may contain tokens stashed before it; `restore`
    unwraps them level by level.

    Args:
        kind: Single letter distinguishing independent stashes in one text.

    Examples:
        stash = SpanStash("C")
        token = stash.stash("`**x**`")
        stash.restore(f"see {token}")  # "see `**x**`"
    """

    def __init__(self, kind: str = "P"):
        if len(kind) != 1 or not kind.isalpha():
            raise ValueError("`kind` must be a single letter")
        self.kind = kind
        self.pattern = re.compile(rf"{_RESERVED}{kind}(\d+){_RESERVED}")
        self._spans: list[str] = []

    def __len__(self) -> int:
        return len(self._spans)

    def stash(self, text: str) -> str:
        self._spans.append(text)
        return f"{_RESERVED}{self.kind}{len(self._spans) - 1}{_RESERVED}"

    def restore(self, text: str) -> str:
        for _ in range(len(self._spans) + 1):
            restored = self.pattern.sub(self._lookup, text)
            if restored == text:
                break
            text = restored
        return text

    def _lookup(self, match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(self._spans):
            return self._spans[index]
        return match.group(0)

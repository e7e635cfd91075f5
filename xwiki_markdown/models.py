"""Data models for the line-oriented scanners."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ListKind(Enum):
    """Kinds of list container, valued by their HTML tag.

    Attributes:
        UNORDERED: Bullet list (``* item``).
        ORDERED: Auto-numbered list (``1. item``).
    """

    UNORDERED = "ul"
    ORDERED = "ol"

    @property
    def open_tag(self) -> str:
        return f"<{self.value}>"

    @property
    def close_tag(self) -> str:
        return f"</{self.value}>"


@dataclass
class ListLevel:
    """One open list container.

    Attributes:
        kind: Container kind.
        indent: Indentation columns of the marker that opened it.
        prefix: Leading whitespace reproduced on the container tags.
    """

    kind: ListKind
    indent: int
    prefix: str = ""


@dataclass
class ListState:
    """Encapsulate list nesting while walking rendered lines.

    Attributes:
        levels: Open containers, outermost first.
    """

    levels: list[ListLevel] = field(default_factory=list)

    @property
    def kind(self) -> ListKind | None:
        """Kind of the innermost open container, or None when no list is open."""
        return self.levels[-1].kind if self.levels else None

    @property
    def indent(self) -> int:
        """Indentation of the most recently opened level (0 when closed)."""
        return self.levels[-1].indent if self.levels else 0


@dataclass
class TableState:
    """Track table runs while synthesising Markdown header separators.

    Attributes:
        in_table: Whether the previous line was a table row.
        separator_added: Whether the current table already has its separator.
    """

    in_table: bool = False
    separator_added: bool = False


@dataclass
class ParagraphState:
    """Track paragraph wrapping across blank-line separated blocks.

    Attributes:
        text_lines: Plain lines collected for the pending paragraph.
        open_blocks: Block-level containers opened but not yet closed.
    """

    text_lines: list[str] = field(default_factory=list)
    open_blocks: int = 0


@dataclass(frozen=True)
class TocEntry:
    """A heading collected for the generated table of contents.

    Attributes:
        level: Heading depth, 1 to 6.
        text: Heading text with inline markup removed.
    """

    level: int
    text: str

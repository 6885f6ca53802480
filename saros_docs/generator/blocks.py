"""Typed presentation blocks produced by the markup renderer.

Every block is a frozen dataclass carrying a ``kind`` discriminator so the
sequence can be pattern-matched by presentation code or serialised as JSON
without extra adapters. :data:`PresentationBlock` is the closed union of block
shapes and :data:`InlineRun` the union allowed inside paragraphs, list items,
and table cells.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(frozen=True, slots=True)
class TextRun:
    """Plain inline text with optional emphasis flags."""

    text: str
    emphasis: bool = False
    strong: bool = False
    kind: str = dc.field(default="text", init=False)


@dc.dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink; ``is_external`` marks scheme-qualified targets.

    Attributes
    ----------
    target : str
        The ``href`` exactly as authored.
    text : str
        Visible link text.
    is_external : bool
        ``True`` for absolute (scheme-qualified or protocol-relative) targets,
        which presentation layers decorate and open in a new context.
    """

    target: str
    text: str
    is_external: bool
    kind: str = dc.field(default="link", init=False)


@dc.dataclass(frozen=True, slots=True)
class CodeBlock:
    """Code span or block.

    Attributes
    ----------
    language : str | None
        Fence language annotation, when present.
    is_inline : bool
        ``True`` when no language was given; such code is styled inline rather
        than syntax highlighted.
    text : str
        Literal code content.
    """

    language: str | None
    is_inline: bool
    text: str
    kind: str = dc.field(default="code", init=False)


InlineRun: typ.TypeAlias = TextRun | Link | CodeBlock


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """Section heading; ``suppressed`` hides it without removing it."""

    level: int
    text: str
    suppressed: bool = False
    kind: str = dc.field(default="heading", init=False)


@dc.dataclass(frozen=True, slots=True)
class Paragraph:
    """A run of inline content."""

    runs: tuple[InlineRun, ...]
    kind: str = dc.field(default="paragraph", init=False)

    @property
    def text(self) -> str:
        """Return the paragraph's visible text."""
        return "".join(run.text for run in self.runs)


@dc.dataclass(frozen=True, slots=True)
class ListBlock:
    """Ordered or unordered list; each item is its own block sequence."""

    ordered: bool
    items: tuple[tuple[PresentationBlock, ...], ...]
    kind: str = dc.field(default="list", init=False)


@dc.dataclass(frozen=True, slots=True)
class Table:
    """Table with a header row and body rows of inline cells."""

    header: tuple[tuple[InlineRun, ...], ...]
    rows: tuple[tuple[tuple[InlineRun, ...], ...], ...]
    kind: str = dc.field(default="table", init=False)


@dc.dataclass(frozen=True, slots=True)
class Quote:
    """Block quote wrapping nested blocks."""

    blocks: tuple[PresentationBlock, ...]
    kind: str = dc.field(default="quote", init=False)


@dc.dataclass(frozen=True, slots=True)
class Rule:
    """Thematic break."""

    kind: str = dc.field(default="rule", init=False)


PresentationBlock: typ.TypeAlias = (
    Heading | Paragraph | ListBlock | CodeBlock | Table | Link | Quote | Rule
)


__all__ = [
    "CodeBlock",
    "Heading",
    "InlineRun",
    "Link",
    "ListBlock",
    "Paragraph",
    "PresentationBlock",
    "Quote",
    "Rule",
    "Table",
    "TextRun",
]

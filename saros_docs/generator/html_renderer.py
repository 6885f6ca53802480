"""Render presentation blocks to HTML with syntax-highlighted code."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .blocks import (
    CodeBlock,
    Heading,
    InlineRun,
    Link,
    ListBlock,
    Paragraph,
    PresentationBlock,
    Quote,
    Rule,
    Table,
    TextRun,
)

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
EXTERNAL_LINK_MARKER = '<span class="external-link-icon" aria-hidden="true">↗</span>'


class HtmlBlockRenderer:
    """Turn block sequences into HTML fragments with consistent styling."""

    def __init__(self, pygments_style: str = "github-dark") -> None:
        """Initialize a renderer with the Pygments style used for code blocks."""
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, blocks: typ.Iterable[PresentationBlock]) -> str:
        """Return the HTML for ``blocks``; suppressed headings are omitted."""
        return "\n".join(
            fragment for block in blocks if (fragment := self.block(block))
        )

    def block(self, block: PresentationBlock) -> str:
        """Return the HTML for a single block."""
        match block:
            case Heading(suppressed=True):
                return ""
            case Heading(level=level, text=text):
                tag = f"h{min(level, 6)}"
                return f"<{tag}>{escape(text)}</{tag}>"
            case Paragraph(runs=runs):
                return f"<p>{self.inline(runs)}</p>"
            case ListBlock(ordered=ordered, items=items):
                tag = "ol" if ordered else "ul"
                rendered = "".join(f"<li>{self._list_item(item)}</li>" for item in items)
                return f"<{tag}>{rendered}</{tag}>"
            case CodeBlock(language=None, text=text):
                return f'<pre class="plain-code"><code>{escape(text)}</code></pre>'
            case CodeBlock(language=language, text=text):
                return self.code_block(text, language)
            case Table(header=header, rows=rows):
                return self._table(header, rows)
            case Link():
                return f"<p>{self.inline((block,))}</p>"
            case Quote(blocks=children):
                return f"<blockquote>{self.render(children)}</blockquote>"
            case Rule():
                return "<hr>"
            case _:  # pragma: no cover - closed union
                return ""

    def inline(self, runs: typ.Iterable[InlineRun]) -> str:
        """Return the HTML for a sequence of inline runs."""
        parts: list[str] = []
        for run in runs:
            match run:
                case TextRun(text=text, emphasis=emphasis, strong=strong):
                    fragment = escape(text)
                    if emphasis:
                        fragment = f"<em>{fragment}</em>"
                    if strong:
                        fragment = f"<strong>{fragment}</strong>"
                    parts.append(fragment)
                case CodeBlock(text=text):
                    parts.append(f'<code class="inline-code">{escape(text)}</code>')
                case Link(target=target, text=text, is_external=True):
                    parts.append(
                        f'<a href="{escape(target, quote=True)}" target="_blank" '
                        f'rel="noopener noreferrer">{escape(text)}{EXTERNAL_LINK_MARKER}</a>'
                    )
                case Link(target=target, text=text):
                    parts.append(f'<a href="{escape(target, quote=True)}">{escape(text)}</a>')
        return "".join(parts)

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML with an optional language tag.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name; defaults to ``"text"`` when not provided or
            when the lexer lookup fails.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        return self._attach_language_attribute(html, lang)

    def _list_item(self, blocks: tuple[PresentationBlock, ...]) -> str:
        if len(blocks) == 1 and isinstance(blocks[0], Paragraph):
            return self.inline(blocks[0].runs)
        return self.render(blocks)

    def _table(
        self,
        header: tuple[tuple[InlineRun, ...], ...],
        rows: tuple[tuple[tuple[InlineRun, ...], ...], ...],
    ) -> str:
        head = "".join(f"<th>{self.inline(cell)}</th>" for cell in header)
        body = "".join(
            "<tr>" + "".join(f"<td>{self.inline(cell)}</td>" for cell in row) + "</tr>"
            for row in rows
        )
        thead = f"<thead><tr>{head}</tr></thead>" if header else ""
        return f'<div class="table-wrapper"><table>{thead}<tbody>{body}</tbody></table></div>'

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["EXTERNAL_LINK_MARKER", "HtmlBlockRenderer"]

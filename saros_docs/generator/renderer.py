"""Convert raw Markdown into typed presentation blocks.

:class:`MarkupRenderer` parses documents with Python-Markdown (``fenced_code``,
``tables`` and ``sane_lists`` enabled), captures the element tree through
:class:`~saros_docs.generator.tree_capture.BlockTreeExtension`, and walks it
into the block dataclasses from :mod:`saros_docs.generator.blocks`.

Rendering is total: elements the walker does not model fall back to plain
paragraphs and raw HTML is reduced to its text, so malformed or unexpected
markup loses fidelity but never raises.

Example
-------
>>> from saros_docs.generator.renderer import MarkupRenderer
>>> blocks = MarkupRenderer().render(
...     "# Title\n\nBody text.", suppress_leading_heading=True
... )
>>> blocks[0].suppressed, blocks[1].text
(True, 'Body text.')
"""

from __future__ import annotations

import dataclasses as dc
import html
import re
import typing as typ
import xml.etree.ElementTree as etree
from urllib.parse import urlsplit

from markdown import Markdown
from markdown.util import HTML_PLACEHOLDER_RE

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
from .tree_capture import LANGUAGE_CLASS_PREFIX, BlockTreeExtension

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown.util import HtmlStash
else:  # pragma: no cover - type-checking fallback
    Element = typ.Any
    HtmlStash = typ.Any

MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
BLOCK_TAGS = HEADING_TAGS | {
    "p",
    "ul",
    "ol",
    "blockquote",
    "pre",
    "table",
    "hr",
    "div",
}
MARKUP_PATTERN = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)
CODE_HTML_PATTERN = re.compile(r"^\s*<pre[\s>]")


def is_external_target(target: str) -> bool:
    """Return ``True`` for scheme-qualified or protocol-relative link targets."""
    parsed = urlsplit(target.strip())
    return bool(parsed.scheme or parsed.netloc)


class MarkupRenderer:
    """Render Markdown text into a tuple of presentation blocks."""

    def __init__(self, extensions: typ.Sequence[str] = MARKDOWN_EXTENSIONS) -> None:
        self._extensions = tuple(extensions)

    def render(
        self, raw_text: str, *, suppress_leading_heading: bool = False
    ) -> tuple[PresentationBlock, ...]:
        """Parse ``raw_text`` into presentation blocks.

        Parameters
        ----------
        raw_text : str
            Document source; it is read but never modified.
        suppress_leading_heading : bool, optional
            Flag the first top-level, non-empty level-one heading as
            ``suppressed`` (for pages whose header already shows the title).
            This is the heading :func:`~saros_docs.markdown_parser.extract_title`
            reads the title from. Other level-one headings are unaffected.

        Returns
        -------
        tuple[PresentationBlock, ...]
            Blocks in document order; empty for blank input.
        """
        capture = BlockTreeExtension()
        md = Markdown(extensions=[*self._extensions, capture])
        md.convert(raw_text)
        if capture.root is None:
            return ()
        walker = _TreeWalker(md.htmlStash, suppress_leading_heading)
        return walker.blocks(capture.root, top_level=True)


class _TreeWalker:
    """Translate one captured element tree into presentation blocks."""

    def __init__(self, stash: HtmlStash, suppress_leading_heading: bool) -> None:
        self._stash = stash
        self._suppress_pending = suppress_leading_heading

    def blocks(
        self, parent: Element, *, top_level: bool = False
    ) -> tuple[PresentationBlock, ...]:
        result: list[PresentationBlock] = []
        for child in parent:
            block = self._block(child)
            if block is None:
                continue
            # the title extractor only reads top-level, non-empty h1 lines
            if (
                top_level
                and self._suppress_pending
                and child.tag == "h1"
                and (len(child) or (child.text or "").strip())
            ):
                block = dc.replace(block, suppressed=True)
                self._suppress_pending = False
            result.append(block)
        return tuple(result)

    def _block(self, element: Element) -> PresentationBlock | None:
        match element.tag:
            case tag if tag in HEADING_TAGS:
                return Heading(
                    level=int(tag[1]), text=self._plain_text(element), suppressed=False
                )
            case "p":
                return self._paragraph(element)
            case "ul" | "ol":
                items = tuple(
                    self._list_item(item) for item in element if item.tag == "li"
                )
                return ListBlock(ordered=element.tag == "ol", items=items)
            case "blockquote":
                return Quote(blocks=self.blocks(element))
            case "pre":
                return _code_block(element, escaped=True)
            case "table":
                return self._table(element)
            case "hr":
                return Rule()
            case _:
                return self._fallback(element)

    def _paragraph(self, element: Element) -> PresentationBlock | None:
        stashed = self._stashed_code(element)
        if stashed is not None:
            return _code_block(stashed, escaped=False)
        runs = self._inline(element)
        if not _has_content(runs):
            return None
        return Paragraph(runs=tuple(_strip_edges(runs)))

    def _list_item(self, item: Element) -> tuple[PresentationBlock, ...]:
        blocks: list[PresentationBlock] = []
        pending = etree.Element("p")
        pending.text = item.text
        for child in item:
            if child.tag not in BLOCK_TAGS:
                pending.append(child)
                continue
            self._flush(pending, blocks)
            block = self._block(child)
            if block is not None:
                blocks.append(block)
            pending = etree.Element("p")
            pending.text = child.tail
        self._flush(pending, blocks)
        return tuple(blocks)

    def _flush(self, pending: Element, blocks: list[PresentationBlock]) -> None:
        runs = self._inline(pending)
        if _has_content(runs):
            blocks.append(Paragraph(runs=tuple(_strip_edges(runs))))

    def _table(self, element: Element) -> Table:
        header: tuple[tuple[InlineRun, ...], ...] = ()
        rows: list[tuple[tuple[InlineRun, ...], ...]] = []
        for section in element:
            for row in section.iter("tr"):
                cells = tuple(
                    tuple(self._inline(cell))
                    for cell in row
                    if cell.tag in ("th", "td")
                )
                if section.tag == "thead" and not header:
                    header = cells
                else:
                    rows.append(cells)
        return Table(header=header, rows=tuple(rows))

    def _fallback(self, element: Element) -> Paragraph | None:
        text = self._plain_text(element)
        if not text:
            return None
        return Paragraph(runs=(TextRun(text),))

    def _inline(
        self, element: Element, *, emphasis: bool = False, strong: bool = False
    ) -> list[InlineRun]:
        runs: list[InlineRun] = []
        self._append_text(runs, element.text, emphasis, strong)
        for child in element:
            match child.tag:
                case "strong" | "b":
                    runs.extend(self._inline(child, emphasis=emphasis, strong=True))
                case "em" | "i":
                    runs.extend(self._inline(child, emphasis=True, strong=strong))
                case "code":
                    text = html.unescape("".join(child.itertext()))
                    runs.append(CodeBlock(language=None, is_inline=True, text=text))
                case "a":
                    target = child.get("href", "")
                    runs.append(
                        Link(
                            target=target,
                            text=self._plain_text(child),
                            is_external=is_external_target(target),
                        )
                    )
                case "img":
                    self._append_text(runs, child.get("alt"), emphasis, strong)
                case "br":
                    # prettify already moved the line break into the tail
                    pass
                case _:
                    self._append_text(runs, self._plain_text(child), emphasis, strong)
            self._append_text(runs, child.tail, emphasis, strong)
        return runs

    def _append_text(
        self, runs: list[InlineRun], text: str | None, emphasis: bool, strong: bool
    ) -> None:
        if not text:
            return
        resolved = self._resolve_placeholders(text)
        if resolved:
            runs.append(TextRun(resolved, emphasis=emphasis, strong=strong))

    def _plain_text(self, element: Element) -> str:
        return "".join(run.text for run in self._inline(element)).strip()

    def _stashed_code(self, element: Element) -> Element | None:
        """Return the ``pre`` element ``fenced_code`` stashed for ``element``."""
        if len(element) or not element.text:
            return None
        match = HTML_PLACEHOLDER_RE.fullmatch(element.text.strip())
        if match is None:
            return None
        stashed = self._stash.rawHtmlBlocks[int(match.group(1))]
        if not isinstance(stashed, str) or not CODE_HTML_PATTERN.match(stashed):
            return None
        try:
            return etree.fromstring(stashed)
        except etree.ParseError:
            # hand-written <pre> markup that is not well formed degrades to text
            return None

    def _resolve_placeholders(self, text: str) -> str:
        def _restore(match: re.Match[str]) -> str:
            stashed = self._stash.rawHtmlBlocks[int(match.group(1))]
            return html.unescape(MARKUP_PATTERN.sub("", str(stashed)))

        return HTML_PLACEHOLDER_RE.sub(_restore, text)


def _code_block(pre: Element, *, escaped: bool) -> CodeBlock:
    """Build a :class:`CodeBlock` from a ``<pre>`` element.

    ``escaped`` is set for elements built by the block parser, whose text still
    carries HTML escapes; elements parsed back from stashed HTML are already
    decoded.
    """
    code = pre.find("code")
    text = "".join((code if code is not None else pre).itertext())
    if escaped:
        text = html.unescape(text)
    language = _language(code)
    return CodeBlock(language=language, is_inline=language is None, text=text.strip("\n"))


def _language(code: Element | None) -> str | None:
    if code is None:
        return None
    for name in (code.get("class") or "").split():
        if name.startswith(LANGUAGE_CLASS_PREFIX):
            return name.removeprefix(LANGUAGE_CLASS_PREFIX) or None
    return None


def _has_content(runs: typ.Sequence[InlineRun]) -> bool:
    return any(not isinstance(run, TextRun) or run.text.strip() for run in runs)


def _strip_edges(runs: list[InlineRun]) -> list[InlineRun]:
    """Trim whitespace left on the outer text runs of a paragraph."""
    trimmed = list(runs)
    if trimmed and isinstance(trimmed[0], TextRun):
        first = trimmed[0]
        trimmed[0] = TextRun(first.text.lstrip(), first.emphasis, first.strong)
    if trimmed and isinstance(trimmed[-1], TextRun):
        last = trimmed[-1]
        trimmed[-1] = TextRun(last.text.rstrip(), last.emphasis, last.strong)
    return [run for run in trimmed if not isinstance(run, TextRun) or run.text]


__all__ = ["MARKDOWN_EXTENSIONS", "MarkupRenderer", "is_external_target"]

"""Python-Markdown hooks that expose the parsed element tree.

:class:`BlockTreeExtension` registers these processors on a
``markdown.Markdown`` instance:

* :class:`FenceNormalizer` tidies fence lines before ``fenced_code`` stashes
  the top-level fenced blocks;
* :class:`AtxHeadingProcessor` replaces the stock ``hashheader`` processor
  with the heading rule :func:`~saros_docs.markdown_parser.extract_title`
  applies;
* :class:`NestedFenceProcessor` parses fences that only start at column zero
  once a list item or quote has been dedented;
* :class:`BlockTreeCapture` records the final element tree after the inline
  and unescape tree processors have run, so callers can walk it instead of
  serialising HTML.
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown import util
from markdown.blockprocessors import BlockProcessor, HashHeaderProcessor
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from saros_docs.markdown_parser import (
    ATX_HEADING_PATTERN,
    atx_heading_text,
    normalize_fences,
)

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

LANGUAGE_CLASS_PREFIX = "language-"
OPEN_FENCE_ATTRIBUTE = "data-open-fence"
FENCE_OPEN_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ ]*\.?(?P<lang>[\w#.+-]*)[ ]*(?:\n|$)"
)


class BlockTreeExtension(Extension):
    """Capture the parsed tree of a single ``Markdown.convert`` call."""

    def __init__(self) -> None:
        super().__init__()
        self.root: Element | None = None

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the fence and heading processors and the tree capture."""
        # between normalize_whitespace (30) and fenced_code_block (25)
        md.preprocessors.register(FenceNormalizer(md), "saros_fence_normalizer", 28)
        md.parser.blockprocessors.register(
            AtxHeadingProcessor(md.parser), "hashheader", 70
        )
        # ahead of the indented code processor (80)
        md.parser.blockprocessors.register(
            NestedFenceProcessor(md.parser), "saros_nested_fence", 85
        )
        md.treeprocessors.register(
            BlockTreeCapture(md, self), "saros_block_tree", -10
        )


class FenceNormalizer(Preprocessor):
    """Apply :func:`~saros_docs.markdown_parser.normalize_fences` to the input."""

    def run(self, lines: list[str]) -> list[str]:
        return normalize_fences("\n".join(lines)).split("\n")


class AtxHeadingProcessor(HashHeaderProcessor):
    """Parse ``#`` headings that have a space after the hashes.

    ``#Overview`` stays paragraph text and a closing run of ``#`` is only
    dropped when whitespace precedes it, matching the title extractor.
    """

    RE = ATX_HEADING_PATTERN

    def run(self, parent: Element, blocks: list[str]) -> None:
        block = blocks.pop(0)
        match = self.RE.search(block)
        if match is None:  # pragma: no cover - test() already matched
            blocks.insert(0, block)
            return
        before, after = block[: match.start()], block[match.end() :]
        if before:
            self.parser.parseBlocks(parent, [before])
        heading = etree.SubElement(parent, f"h{len(match.group('level'))}")
        heading.text = atx_heading_text(match.group("header"))
        if after:
            if self.parser.state.isstate("looselist"):
                after = self.looseDetab(after)
            blocks.insert(0, after)


class NestedFenceProcessor(BlockProcessor):
    """Parse fenced code inside list items and block quotes.

    ``fenced_code`` only finds fences at column zero of the whole document.
    A fence indented under a list item reaches the block parser after the
    item is dedented, split into blocks at blank lines; those blocks are
    joined into one ``<pre><code>`` element until the closing fence. An
    unclosed fence runs to the end of its container.
    """

    def test(self, parent: Element, block: str) -> bool:
        if parent is self.parser.root:
            return False
        return (
            self._open_block(parent) is not None
            or FENCE_OPEN_PATTERN.match(block) is not None
        )

    def run(self, parent: Element, blocks: list[str]) -> None:
        block = blocks.pop(0)
        pre = self._open_block(parent)
        if pre is None:
            opening = FENCE_OPEN_PATTERN.match(block)
            if opening is None:  # pragma: no cover - test() already matched
                return
            pre = etree.SubElement(parent, "pre")
            pre.set(OPEN_FENCE_ATTRIBUTE, opening.group("fence"))
            code = etree.SubElement(pre, "code")
            if opening.group("lang"):
                code.set("class", f"{LANGUAGE_CLASS_PREFIX}{opening.group('lang')}")
            body = block[opening.end() :]
        else:
            body = f"\n\n{block}"
        fence = pre.get(OPEN_FENCE_ATTRIBUTE, "")
        closing = re.search(rf"^{re.escape(fence)}[ ]*$", body, re.MULTILINE)
        if closing is not None:
            del pre.attrib[OPEN_FENCE_ATTRIBUTE]
            rest = body[closing.end() :].lstrip("\n")
            body = body[: closing.start()]
            if rest:
                blocks.insert(0, rest)
        code = pre[0]
        code.text = util.AtomicString(f"{code.text or ''}{util.code_escape(body)}")

    def _open_block(self, parent: Element) -> Element | None:
        sibling = self.lastChild(parent)
        if sibling is not None and sibling.tag == "pre" and sibling.get(
            OPEN_FENCE_ATTRIBUTE
        ):
            return sibling
        return None


class BlockTreeCapture(Treeprocessor):
    """Hand the finished element tree back to the owning extension."""

    def __init__(self, md: Markdown, extension: BlockTreeExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> None:
        """Record ``root`` without modifying it."""
        self.extension.root = root


__all__ = [
    "LANGUAGE_CLASS_PREFIX",
    "AtxHeadingProcessor",
    "BlockTreeCapture",
    "BlockTreeExtension",
    "FenceNormalizer",
    "NestedFenceProcessor",
]

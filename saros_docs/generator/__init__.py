"""Utilities for rendering documents into presentation blocks and static pages."""

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
from .html_renderer import HtmlBlockRenderer
from .page_generator import SiteBuilder
from .renderer import MarkupRenderer
from .tree_capture import BlockTreeExtension

__all__ = [
    "BlockTreeExtension",
    "CodeBlock",
    "Heading",
    "HtmlBlockRenderer",
    "InlineRun",
    "Link",
    "ListBlock",
    "MarkupRenderer",
    "Paragraph",
    "PresentationBlock",
    "Quote",
    "Rule",
    "SiteBuilder",
    "Table",
    "TextRun",
]

r"""Inspect raw Markdown documents without rendering them.

This module holds the line-level helpers shared by the exporter and the
renderer: fenced code normalisation, the ``#`` heading rule, and title
extraction. The renderer parses headings and fences with the same patterns, so
the title picked here is always the heading the renderer sees first. All of
these work on the original document text and never modify it.

Example
-------
>>> from saros_docs.markdown_parser import extract_title
>>> extract_title("# Swap Tutorial\nBody")
'Swap Tutorial'
>>> extract_title("# Using C#")
'Using C#'
>>> extract_title("#NoSpace")
'Documentation'
"""

from __future__ import annotations

import re

from markdown.extensions.fenced_code import FencedBlockPreprocessor

from ._constants import DEFAULT_TITLE

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
# the fence rule ``fenced_code`` applies when rendering
FENCED_BLOCK_PATTERN = FencedBlockPreprocessor.FENCED_BLOCK_RE
ATX_HEADING_PATTERN = re.compile(
    r"(?:^|\n)(?P<level>#{1,6})(?P<header>[ \t][^\n]*)?(?:\n|$)"
)
CLOSING_HASHES_PATTERN = re.compile(r"(?:^|[ \t]+)#+$")
SETEXT_H1_PATTERN = re.compile(r"^=+[ ]*$")
INDENTED_CODE_PATTERN = re.compile(r"^(?: {4}|\t)")


def normalize_fences(text: str) -> str:
    """Return ``text`` with fence indentation and fence label extras removed.

    Fences indented by up to three spaces are moved to column zero and labels
    such as ``rust,no_run`` are reduced to their language (``rust``).
    """
    without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

    def _strip_labels(match: re.Match[str]) -> str:
        fence, language, _extras = match.groups()
        return f"{fence}{language or ''}"

    return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def atx_heading_text(header: str | None) -> str:
    """Return the text of a ``#`` heading with its closing sequence removed.

    A closing run of ``#`` only counts when whitespace separates it from the
    text, so ``# Using C#`` keeps its trailing hash.

    Examples
    --------
    >>> atx_heading_text(" Closed Title ## ")
    'Closed Title'
    >>> atx_heading_text(" Using C#")
    'Using C#'
    """
    return CLOSING_HASHES_PATTERN.sub("", (header or "").strip()).strip()


def _mask_fenced_blocks(text: str) -> str:
    """Blank out fenced code so headings inside code samples are ignored."""

    def _blank(match: re.Match[str]) -> str:
        return "\n" * match.group(0).count("\n")

    return FENCED_BLOCK_PATTERN.sub(_blank, normalize_fences(text))


def extract_title(raw_text: str, default: str = DEFAULT_TITLE) -> str:
    """Return the text of the first level-one heading in ``raw_text``.

    Parameters
    ----------
    raw_text : str
        Unmodified document source.
    default : str, optional
        Title returned when the document has no level-one heading. Defaults to
        ``"Documentation"``.

    Returns
    -------
    str
        The trimmed text of the first non-empty ``# Title`` line (closing
        hashes dropped) or setext ``Title`` / ``=====`` pair outside fenced
        code, or ``default``. Headings nested in quotes or list items do not
        count.
    """
    lines = _mask_fenced_blocks(raw_text).splitlines()
    previous = ""
    previous_starts_block = False
    block_start = True
    for line in lines:
        atx = ATX_HEADING_PATTERN.match(line)
        if atx and len(atx.group("level")) == 1:
            title = atx_heading_text(atx.group("header"))
            if title:
                return title
        # setext headings only form on the first line of a block
        if (
            previous_starts_block
            and previous.strip()
            and not INDENTED_CODE_PATTERN.match(previous)
            and not ATX_HEADING_PATTERN.match(previous)
            and SETEXT_H1_PATTERN.match(line)
        ):
            return previous.strip()
        previous, previous_starts_block = line, block_start
        block_start = not line.strip()
    return default


__all__ = [
    "ATX_HEADING_PATTERN",
    "FENCED_BLOCK_PATTERN",
    "atx_heading_text",
    "extract_title",
    "normalize_fences",
]

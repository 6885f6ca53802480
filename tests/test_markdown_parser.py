"""Unit tests for title extraction and fence normalisation."""

from __future__ import annotations

import pytest

from saros_docs.markdown_parser import atx_heading_text, extract_title, normalize_fences


@pytest.mark.parametrize(
    ("raw_text", "expected"),
    [
        ("# Title\n\nBody text.", "Title"),
        ("#   Padded Title   \n", "Padded Title"),
        ("# Closed Title ##\n", "Closed Title"),
        ("Intro line\n\n# Later Title\n\n# Second Title\n", "Later Title"),
        ("## Only a subsection\n\nText", "Documentation"),
        ("Setext Title\n============\n\nBody", "Setext Title"),
        ("", "Documentation"),
        ("#NoSpace is not a heading\n", "Documentation"),
        ("#Overview\n\nIntro\n\n# Real Title\n\nBody", "Real Title"),
        ("# Using C#\n", "Using C#"),
        ("# \n\n# After Empty\n", "After Empty"),
        ("> # Quoted\n\n# Top Level\n", "Top Level"),
        ("## Section\n====\n", "Documentation"),
        ("    Indented\n====\n", "Documentation"),
    ],
)
def test_extract_title(raw_text: str, expected: str) -> None:
    assert extract_title(raw_text) == expected


def test_extract_title_ignores_fenced_code() -> None:
    """Shell comments inside fences are not mistaken for headings."""
    raw_text = "```bash\n# install deps\nnpm install\n```\n\n# Real Title\n"
    assert extract_title(raw_text) == "Real Title"


def test_extract_title_uses_custom_default() -> None:
    assert extract_title("plain", default="Saros SDK Documentation") == (
        "Saros SDK Documentation"
    )


def test_extract_title_is_pure() -> None:
    raw_text = "# Stable\n\ntext"
    assert extract_title(raw_text) == extract_title(raw_text)
    assert raw_text == "# Stable\n\ntext"


def test_normalize_fences_strips_indent_and_label_extras() -> None:
    text = "  ```rust,no_run\n  fn main() {}\n  ```\n"
    assert normalize_fences(text).splitlines()[0] == "```rust"


def test_unclosed_fence_does_not_hide_headings() -> None:
    """Without a closing fence the lines are prose, as Python-Markdown reads them."""
    assert extract_title("```bash\n# Title\n") == "Title"


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (" Closed ##", "Closed"),
        (" Using C#", "Using C#"),
        (" ##", ""),
        (None, ""),
    ],
)
def test_atx_heading_text(header: str | None, expected: str) -> None:
    assert atx_heading_text(header) == expected

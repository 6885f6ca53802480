"""Unit tests for the slug registry and static enumeration."""

from __future__ import annotations

import pytest

from saros_docs.enumeration import generate_static_params
from saros_docs.errors import DocsConfigError
from saros_docs.registry import DEFAULT_DOCUMENTS, DocumentEntry, NavGroup, SlugRegistry


def test_default_registry_preserves_export_order() -> None:
    """The bundled registry lists slugs in the corpus export order."""
    registry = SlugRegistry.default()
    assert registry.all() == tuple(entry.slug for entry in DEFAULT_DOCUMENTS)
    assert registry.all()[0] == "saros-docs-index"
    assert registry.all()[-1] == "saros-sdk-comparison"
    assert len(registry) == 10


def test_default_navigation_differs_from_export_order() -> None:
    """SDK Comparison sits under Getting Started even though it exports last."""
    groups = SlugRegistry.default().groups()
    assert [group.label for group in groups] == [
        "Getting Started",
        "Tutorials",
        "Reference",
        "Analysis",
    ]
    assert groups[0].items[-1] == ("saros-sdk-comparison", "SDK Comparison")


def test_is_valid_never_raises() -> None:
    """Membership checks return booleans for any string."""
    registry = SlugRegistry([DocumentEntry("intro", "Intro")])
    assert registry.is_valid("intro")
    assert not registry.is_valid("")
    assert not registry.is_valid("../etc/passwd")
    assert "intro" in registry
    assert 3 not in registry
    assert registry.entry("missing") is None


def test_groups_derived_from_entries_when_navigation_absent() -> None:
    """Without navigation, groups follow entry labels in registry order."""
    registry = SlugRegistry(
        [
            DocumentEntry("a", "A", "First"),
            DocumentEntry("b", "B", "Second"),
            DocumentEntry("c", "C", "First"),
        ]
    )
    assert registry.groups() == (
        NavGroup("First", (("a", "A"), ("c", "C"))),
        NavGroup("Second", (("b", "B"),)),
    )


def test_duplicate_slugs_are_rejected() -> None:
    with pytest.raises(DocsConfigError, match="Duplicate"):
        SlugRegistry([DocumentEntry("a", "A"), DocumentEntry("a", "Again")])


def test_navigation_with_unknown_slug_is_rejected() -> None:
    with pytest.raises(DocsConfigError, match="unknown slug 'ghost'"):
        SlugRegistry([DocumentEntry("a", "A")], [("Group", ["a", "ghost"])])


def test_static_params_follow_registry_order() -> None:
    """Enumeration is a pass-through over the registry."""
    registry = SlugRegistry(
        [DocumentEntry("b", "B"), DocumentEntry("a", "A"), DocumentEntry("c", "C")]
    )
    assert generate_static_params(registry) == [
        {"slug": "b"},
        {"slug": "a"},
        {"slug": "c"},
    ]

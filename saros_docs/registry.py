"""Ordered catalogue of the documents the site is allowed to serve.

The :class:`SlugRegistry` is the single source of truth for which slugs exist,
the order bulk exports follow, and how navigation groups present them. It is
built once (usually by :func:`saros_docs.config.load_site_config`) and passed
to every component that needs it; nothing looks it up globally.

Example
-------
>>> from saros_docs.registry import DocumentEntry, SlugRegistry
>>> registry = SlugRegistry([DocumentEntry("intro", "Intro", "Basics")])
>>> registry.is_valid("intro"), registry.is_valid("missing")
(True, False)
>>> registry.groups()[0].items
(('intro', 'Intro'),)
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .errors import DocsConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class DocumentEntry:
    """One registered document.

    Attributes
    ----------
    slug : str
        Stable identifier used in URLs and storage lookups.
    name : str
        Display name shown by navigation consumers.
    group : str
        Navigation group label used when no explicit navigation is configured.
    """

    slug: str
    name: str
    group: str = "Documentation"


@dc.dataclass(frozen=True, slots=True)
class NavGroup:
    """A navigation group with its ordered ``(slug, display_name)`` pairs."""

    label: str
    items: tuple[tuple[str, str], ...]


DEFAULT_DOCUMENTS: tuple[DocumentEntry, ...] = (
    DocumentEntry("saros-docs-index", "Documentation Hub", "Getting Started"),
    DocumentEntry("saros-docs-quickstart", "Quick Start Guide", "Getting Started"),
    DocumentEntry("saros-tutorial-swap", "Token Swap Tutorial", "Tutorials"),
    DocumentEntry("saros-tutorial-liquidity", "Liquidity Tutorial", "Tutorials"),
    DocumentEntry("saros-tutorial-farming", "Farming Tutorial", "Tutorials"),
    DocumentEntry("saros-api-reference", "API Reference", "Reference"),
    DocumentEntry("saros-code-examples", "Code Examples", "Reference"),
    DocumentEntry("saros-troubleshooting", "Troubleshooting", "Reference"),
    DocumentEntry("saros-sdk-analysis", "SDK Analysis", "Analysis"),
    DocumentEntry("saros-sdk-comparison", "SDK Comparison", "Getting Started"),
)

DEFAULT_NAVIGATION: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Getting Started",
        ("saros-docs-index", "saros-docs-quickstart", "saros-sdk-comparison"),
    ),
    (
        "Tutorials",
        ("saros-tutorial-swap", "saros-tutorial-liquidity", "saros-tutorial-farming"),
    ),
    (
        "Reference",
        ("saros-api-reference", "saros-code-examples", "saros-troubleshooting"),
    ),
    ("Analysis", ("saros-sdk-analysis",)),
)


class SlugRegistry:
    """Immutable, ordered set of document slugs with navigation metadata."""

    __slots__ = ("_entries", "_groups", "_order")

    def __init__(
        self,
        entries: cabc.Iterable[DocumentEntry],
        navigation: cabc.Iterable[tuple[str, cabc.Sequence[str]]] | None = None,
    ) -> None:
        """Build the registry and validate its definition.

        Parameters
        ----------
        entries : Iterable[DocumentEntry]
            Documents in export order.
        navigation : Iterable[tuple[str, Sequence[str]]], optional
            Explicit ``(label, slugs)`` navigation groups. When omitted the
            groups follow each entry's ``group`` label in registry order.

        Raises
        ------
        DocsConfigError
            If a slug is empty or duplicated, or navigation names a slug that
            is not registered.
        """
        ordered: dict[str, DocumentEntry] = {}
        for entry in entries:
            if not entry.slug:
                msg = "Document slugs must be non-empty."
                raise DocsConfigError(msg)
            if entry.slug in ordered:
                msg = f"Duplicate document slug '{entry.slug}'."
                raise DocsConfigError(msg)
            ordered[entry.slug] = entry
        self._entries = ordered
        self._order = tuple(ordered)
        if navigation is None:
            self._groups = self._derive_groups()
        else:
            self._groups = self._build_groups(navigation)

    @classmethod
    def default(cls) -> SlugRegistry:
        """Return the registry describing the bundled Saros SDK corpus."""
        return cls(DEFAULT_DOCUMENTS, DEFAULT_NAVIGATION)

    def is_valid(self, slug: str) -> bool:
        """Return ``True`` when ``slug`` is registered."""
        return slug in self._entries

    def all(self) -> tuple[str, ...]:
        """Return every slug in registry order."""
        return self._order

    def groups(self) -> tuple[NavGroup, ...]:
        """Return navigation groups in display order."""
        return self._groups

    def entry(self, slug: str) -> DocumentEntry | None:
        """Return the entry for ``slug`` or ``None`` when it is unknown."""
        return self._entries.get(slug)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and slug in self._entries

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"SlugRegistry({list(self._order)!r})"

    def _derive_groups(self) -> tuple[NavGroup, ...]:
        grouped: dict[str, list[tuple[str, str]]] = {}
        for entry in self._entries.values():
            grouped.setdefault(entry.group, []).append((entry.slug, entry.name))
        return tuple(
            NavGroup(label=label, items=tuple(items))
            for label, items in grouped.items()
        )

    def _build_groups(
        self, navigation: cabc.Iterable[tuple[str, cabc.Sequence[str]]]
    ) -> tuple[NavGroup, ...]:
        groups: list[NavGroup] = []
        for label, slugs in navigation:
            items: list[tuple[str, str]] = []
            for slug in slugs:
                entry = self._entries.get(slug)
                if entry is None:
                    msg = f"Navigation group '{label}' references unknown slug '{slug}'."
                    raise DocsConfigError(msg)
                items.append((entry.slug, entry.name))
            groups.append(NavGroup(label=label, items=tuple(items)))
        return tuple(groups)


__all__ = [
    "DEFAULT_DOCUMENTS",
    "DEFAULT_NAVIGATION",
    "DocumentEntry",
    "NavGroup",
    "SlugRegistry",
]

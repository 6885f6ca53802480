"""Utility helpers shared by the docs configuration loader."""

from __future__ import annotations

import typing as typ

from saros_docs.errors import DocsConfigError
from saros_docs.registry import DocumentEntry


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _mapping(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return ``raw[key]`` as a mapping, treating a missing/null value as empty."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise DocsConfigError(msg)
    return value


def _non_negative_int(value: object, *, field: str) -> int:
    """Return ``value`` as a non-negative integer or raise DocsConfigError."""
    match value:
        case bool():
            pass
        case int() if value >= 0:
            return value
    msg = f"'{field}' must be a non-negative integer, got {value!r}."
    raise DocsConfigError(msg)


def _bool(value: object, *, field: str) -> bool:
    """Return ``value`` if it is a YAML boolean or raise DocsConfigError."""
    if isinstance(value, bool):
        return value
    msg = f"'{field}' must be true or false, got {value!r}."
    raise DocsConfigError(msg)


def _timeout(value: object) -> float | None:
    """Return a positive timeout in seconds, or None to disable it."""
    match value:
        case None:
            return None
        case bool():
            pass
        case int() | float() if value > 0:
            return float(value)
    msg = f"'storage.timeout' must be a positive number or null, got {value!r}."
    raise DocsConfigError(msg)


def _label_from_slug(slug: str) -> str:
    """Derive a display name from a slug (``saros-api-reference`` -> ``Saros Api Reference``)."""
    return slug.replace("-", " ").title()


def _build_entries(raw_documents: object) -> list[DocumentEntry]:
    """Build registry entries from the ``documents`` list."""
    if not isinstance(raw_documents, list) or not raw_documents:
        msg = "No documents defined in docs configuration."
        raise DocsConfigError(msg)
    entries: list[DocumentEntry] = []
    for payload in raw_documents:
        match payload:
            case str() as slug:
                entries.append(DocumentEntry(slug=slug, name=_label_from_slug(slug)))
            case {"slug": str() as slug, **rest}:
                name = _optional_str(rest.get("name")) or _label_from_slug(slug)
                group = _optional_str(rest.get("group")) or "Documentation"
                entries.append(DocumentEntry(slug=slug, name=name, group=group))
            case _:
                msg = f"Invalid document entry {payload!r}; expected a slug or mapping."
                raise DocsConfigError(msg)
    return entries


def _build_navigation(raw_navigation: object) -> list[tuple[str, list[str]]] | None:
    """Build ``(label, slugs)`` navigation groups, or None when absent."""
    if raw_navigation is None:
        return None
    if not isinstance(raw_navigation, list):
        msg = "'navigation' must be a list of groups."
        raise DocsConfigError(msg)
    groups: list[tuple[str, list[str]]] = []
    for payload in raw_navigation:
        match payload:
            case {"label": str() as label, "items": list() as items}:
                groups.append((label, [str(item) for item in items]))
            case _:
                msg = f"Invalid navigation group {payload!r}; expected label and items."
                raise DocsConfigError(msg)
    return groups


__all__ = [
    "_bool",
    "_build_entries",
    "_build_navigation",
    "_label_from_slug",
    "_mapping",
    "_non_negative_int",
    "_optional_str",
    "_timeout",
]

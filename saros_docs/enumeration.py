"""Enumerate every document slug for static pre-rendering.

Pre-render steps (the ``build`` command, or an external static exporter) call
:func:`generate_static_params` to learn which pages to materialise ahead of
request time.

Example
-------
>>> from saros_docs.registry import DocumentEntry, SlugRegistry
>>> from saros_docs.enumeration import generate_static_params
>>> generate_static_params(SlugRegistry([DocumentEntry("a", "A")]))
[{'slug': 'a'}]
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .registry import SlugRegistry


def generate_static_params(registry: SlugRegistry) -> list[dict[str, str]]:
    """Return one ``{"slug": ...}`` mapping per registered document, in order."""
    return [{"slug": slug} for slug in registry.all()]


__all__ = ["generate_static_params"]

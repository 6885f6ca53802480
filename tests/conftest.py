"""Shared fixtures for the saros_docs test suite.

The fixtures build pipelines over an in-memory content source so tests can
control document bodies, inject storage failures, and assert which slugs were
read, without touching the filesystem or the network.
"""

from __future__ import annotations

import typing as typ

import pytest

from saros_docs.config import SiteConfig, SiteSettings
from saros_docs.pipeline import DocsPipeline
from saros_docs.registry import DocumentEntry, SlugRegistry

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MemorySource:
    """Content source backed by a dict that records every read."""

    def __init__(
        self,
        documents: cabc.Mapping[str, str],
        *,
        failing: cabc.Iterable[str] = (),
        errors: cabc.Mapping[str, Exception] | None = None,
    ) -> None:
        self.documents = dict(documents)
        self.failing = set(failing)
        self.errors = dict(errors or {})
        self.reads: list[str] = []

    def read(self, slug: str) -> str:
        self.reads.append(slug)
        if slug in self.errors:
            raise self.errors[slug]
        if slug in self.failing:
            msg = f"simulated I/O failure for {slug}"
            raise OSError(msg)
        try:
            return self.documents[slug]
        except KeyError as exc:
            raise FileNotFoundError(slug) from exc


SAMPLE_DOCUMENTS: dict[str, str] = {
    "a": "# Alpha Guide\n\nAlpha body.\n",
    "b": "# Beta Guide\n\nBeta body.\n",
    "c": "Gamma has no heading.\n",
}


@pytest.fixture
def sample_documents() -> dict[str, str]:
    """Return three small documents keyed by slug."""
    return dict(SAMPLE_DOCUMENTS)


@pytest.fixture
def build_pipeline() -> cabc.Callable[..., DocsPipeline]:
    """Return a factory building a pipeline over a :class:`MemorySource`."""

    def _build(
        documents: cabc.Mapping[str, str],
        *,
        failing: cabc.Iterable[str] = (),
        errors: cabc.Mapping[str, Exception] | None = None,
        slugs: cabc.Sequence[str] | None = None,
        site_name: str = "Test Docs",
    ) -> DocsPipeline:
        ordered = list(slugs) if slugs is not None else list(documents)
        registry = SlugRegistry(
            DocumentEntry(slug, slug.upper(), "Docs") for slug in ordered
        )
        config = SiteConfig(
            registry=registry,
            site=SiteSettings(name=site_name, origin="https://docs.example"),
        )
        return DocsPipeline.from_config(
            config, source=MemorySource(documents, failing=failing, errors=errors)
        )

    return _build


@pytest.fixture
def make_source() -> type[MemorySource]:
    """Return the in-memory source class for tests that build stores directly."""
    return MemorySource

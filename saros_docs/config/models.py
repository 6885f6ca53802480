"""Typed dataclasses describing the docs site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from saros_docs._constants import (
    CORPUS_CACHE_MAX_AGE,
    DEFAULT_SITE_NAME,
    DEFAULT_TITLE,
    PAGE_CACHE_MAX_AGE,
)
from saros_docs.errors import DocsConfigError
from saros_docs.registry import SlugRegistry
from saros_docs.storage import DEFAULT_TIMEOUT


@dc.dataclass(frozen=True, slots=True)
class SiteSettings:
    """Site-wide naming and addressing."""

    name: str = DEFAULT_SITE_NAME
    origin: str = "http://localhost:3000"
    default_title: str = DEFAULT_TITLE
    default_page: str | None = None


@dc.dataclass(frozen=True, slots=True)
class StorageSettings:
    """Where raw documents are read from; exactly one backend is set."""

    docs_dir: Path | None = None
    source_url: str | None = None
    timeout: float | None = DEFAULT_TIMEOUT


@dc.dataclass(frozen=True, slots=True)
class ExportSettings:
    """Caching and retry policy for plain-text exports."""

    page_max_age: int = PAGE_CACHE_MAX_AGE
    corpus_max_age: int = CORPUS_CACHE_MAX_AGE
    corpus_immutable: bool = False
    retries: int = 0


@dc.dataclass(frozen=True, slots=True)
class BuildSettings:
    """Static pre-render output options."""

    output_dir: Path = Path("public")
    pygments_style: str = "github-dark"


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Fully resolved configuration passed to the pipeline components."""

    registry: SlugRegistry
    site: SiteSettings = SiteSettings()
    storage: StorageSettings = StorageSettings(docs_dir=Path("src/docs"))
    export: ExportSettings = ExportSettings()
    build: BuildSettings = BuildSettings()

    def default_slug(self) -> str:
        """Return the configured default page or the first registered slug."""
        default = self.site.default_page
        if default and self.registry.is_valid(default):
            return default
        slugs = self.registry.all()
        if not slugs:  # pragma: no cover - loader rejects empty registries
            msg = "No documents configured."
            raise DocsConfigError(msg)
        return slugs[0]


__all__ = [
    "BuildSettings",
    "DocsConfigError",
    "ExportSettings",
    "SiteConfig",
    "SiteSettings",
    "StorageSettings",
]

"""Wire configuration into the store, exporter, and renderer components."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .export import CacheHint, DocumentExporter
from .generator.renderer import MarkupRenderer
from .storage import ContentSource, DocumentStore, FileSystemSource, HttpSource

if typ.TYPE_CHECKING:
    from .config import SiteConfig, StorageSettings
    from .registry import SlugRegistry


def build_source(storage: StorageSettings) -> ContentSource:
    """Return the content source selected by the storage settings."""
    if storage.source_url:
        return HttpSource(storage.source_url)
    if storage.docs_dir is None:  # pragma: no cover - loader always sets one
        msg = "Storage settings define neither docs_dir nor source_url."
        raise ValueError(msg)
    return FileSystemSource(storage.docs_dir)


@dc.dataclass(slots=True)
class DocsPipeline:
    """The configured components shared by the CLI and the static builder."""

    config: SiteConfig
    store: DocumentStore
    exporter: DocumentExporter
    renderer: MarkupRenderer

    @property
    def registry(self) -> SlugRegistry:
        """Return the registry every component was built with."""
        return self.store.registry

    @classmethod
    def from_config(
        cls, config: SiteConfig, *, source: ContentSource | None = None
    ) -> DocsPipeline:
        """Build the pipeline for ``config``.

        Parameters
        ----------
        config : SiteConfig
            Loaded site configuration.
        source : ContentSource, optional
            Override for the storage source (tests use in-memory sources);
            defaults to the backend named by ``config.storage``.
        """
        store = DocumentStore(
            config.registry,
            source or build_source(config.storage),
            timeout=config.storage.timeout,
            default_title=config.site.default_title,
        )
        exporter = DocumentExporter(
            store,
            site_name=config.site.name,
            page_cache=CacheHint(config.export.page_max_age),
            corpus_cache=CacheHint(
                config.export.corpus_max_age,
                immutable=config.export.corpus_immutable,
            ),
            bulk_retries=config.export.retries,
        )
        return cls(config=config, store=store, exporter=exporter, renderer=MarkupRenderer())


__all__ = ["DocsPipeline", "build_source"]

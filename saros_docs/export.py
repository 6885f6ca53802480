"""Plain-text exports of single documents and of the whole corpus.

The exports feed language-model tooling, so their shape is a fixed contract:

.. code-block:: text

    # <title>
    URL: /docs/<slug>
    Source: <origin>/docs/<slug>

    <title> documentation from <site name>.

    ***

    <raw markdown, verbatim>

The corpus export joins one such segment per registered slug, in registry
order, with ``CORPUS_SEPARATOR``. A document that fails to load is replaced by
a short placeholder segment naming its slug; the corpus export itself never
fails. A ``---`` thematic break that follows a blank line inside a corpus
segment is written as the equivalent ``***`` break, so splitting the corpus on
the separator always yields one segment per registered slug.

Example
-------
>>> import asyncio
>>> from saros_docs.export import DocumentExporter
>>> exporter = DocumentExporter(store)  # doctest: +SKIP
>>> artifact = asyncio.run(exporter.export_all("https://docs.example"))  # doctest: +SKIP
>>> artifact.cache_hint.header_value()  # doctest: +SKIP
'public, max-age=86400'
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import re
import typing as typ

from ._constants import (
    CORPUS_CACHE_MAX_AGE,
    CORPUS_SEPARATOR,
    DEFAULT_SITE_NAME,
    EXPORT_RULE,
    PAGE_CACHE_MAX_AGE,
    TEXT_CONTENT_TYPE,
)
from .errors import DocumentError

if typ.TYPE_CHECKING:
    from .storage import DocumentRecord, DocumentStore

logger = logging.getLogger(__name__)

# a `---` line after a blank line, the only way a segment can contain or end
# into CORPUS_SEPARATOR
SEPARATOR_BREAK_PATTERN = re.compile(r"(?<=\n\n)---(?=\n|\Z)")


@dc.dataclass(frozen=True, slots=True)
class CacheHint:
    """Caching policy advertised to whatever serves an export."""

    max_age: int
    public: bool = True
    immutable: bool = False

    def header_value(self) -> str:
        """Return the matching ``Cache-Control`` header value."""
        parts = ["public" if self.public else "private", f"max-age={self.max_age}"]
        if self.immutable:
            parts.append("immutable")
        return ", ".join(parts)


@dc.dataclass(frozen=True, slots=True)
class ExportArtifact:
    """A plain-text export body with its caching hint."""

    body: str
    cache_hint: CacheHint
    mime_type: str = TEXT_CONTENT_TYPE


def format_document(record: DocumentRecord, origin: str, site_name: str) -> str:
    """Return the plain-text export of a loaded document."""
    base = origin.rstrip("/")
    return (
        f"# {record.title}\n"
        f"URL: {record.canonical_path}\n"
        f"Source: {base}{record.canonical_path}\n"
        "\n"
        f"{record.title} documentation from {site_name}.\n"
        "\n"
        f"{EXPORT_RULE}\n"
        "\n"
        f"{record.raw_text}"
    )


def placeholder_segment(slug: str) -> str:
    """Return the segment substituted for a document that failed to load."""
    return f"# Error loading {slug}\nFailed to load documentation for {slug}"


def guard_separator(segment: str) -> str:
    r"""Return ``segment`` rewritten so it cannot collide with the corpus separator.

    Examples
    --------
    >>> guard_separator("Part one\n\n---\n\nPart two")
    'Part one\n\n***\n\nPart two'
    >>> guard_separator("Heading\n---\n")
    'Heading\n---\n'
    """
    return SEPARATOR_BREAK_PATTERN.sub(EXPORT_RULE, segment)


class DocumentExporter:
    """Produce single-document and whole-corpus plain-text exports."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        site_name: str = DEFAULT_SITE_NAME,
        page_cache: CacheHint | None = None,
        corpus_cache: CacheHint | None = None,
        bulk_retries: int = 0,
    ) -> None:
        """Initialize the exporter.

        Parameters
        ----------
        store : DocumentStore
            Store used to resolve and load documents; its registry defines the
            corpus order.
        site_name : str, optional
            Name quoted in each export's description line.
        page_cache : CacheHint, optional
            Hint for single-document exports. Defaults to one public hour.
        corpus_cache : CacheHint, optional
            Hint for the corpus export. Defaults to one public day.
        bulk_retries : int, optional
            Extra load attempts per document during a corpus export before
            the placeholder is used. Defaults to ``0``.
        """
        if bulk_retries < 0:
            msg = "bulk_retries must be zero or positive."
            raise ValueError(msg)
        self.store = store
        self.site_name = site_name
        self.page_cache = page_cache or CacheHint(PAGE_CACHE_MAX_AGE)
        self.corpus_cache = corpus_cache or CacheHint(CORPUS_CACHE_MAX_AGE)
        self.bulk_retries = bulk_retries

    async def export_one(self, slug: str, origin: str) -> ExportArtifact:
        """Export a single document.

        Parameters
        ----------
        slug : str
            Registered document identifier.
        origin : str
            Scheme and host used to build the ``Source:`` line.

        Returns
        -------
        ExportArtifact
            The formatted document with the page cache hint.

        Raises
        ------
        DocumentNotFoundError
            If ``slug`` is not registered.
        SourceUnavailableError
            If the document could not be read.
        """
        record = await self.store.fetch(slug)
        body = format_document(record, origin, self.site_name)
        return ExportArtifact(body=body, cache_hint=self.page_cache)

    async def export_all(self, origin: str) -> ExportArtifact:
        """Export every registered document as one artifact.

        Loads run concurrently; segments are assembled in registry order and a
        failed document contributes :func:`placeholder_segment` instead of its
        body.
        """
        slugs = self.store.registry.all()
        segments = await asyncio.gather(
            *(self._corpus_segment(slug, origin) for slug in slugs)
        )
        return ExportArtifact(
            body=CORPUS_SEPARATOR.join(segments), cache_hint=self.corpus_cache
        )

    async def _corpus_segment(self, slug: str, origin: str) -> str:
        attempts = self.bulk_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                record = await self.store.fetch(slug)
            except DocumentError as exc:
                logger.error(
                    "Error loading %s for corpus export (attempt %d/%d): %s",
                    slug,
                    attempt,
                    attempts,
                    exc,
                )
                continue
            return guard_separator(format_document(record, origin, self.site_name))
        return placeholder_segment(slug)


__all__ = [
    "CacheHint",
    "DocumentExporter",
    "ExportArtifact",
    "format_document",
    "guard_separator",
    "placeholder_segment",
]

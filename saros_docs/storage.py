"""Resolve registered slugs to raw Markdown text.

The storage collaborator is a read-only key-value source. Two sources are
provided: :class:`FileSystemSource` reads ``<docs_dir>/<slug>.md`` and
:class:`HttpSource` fetches ``<base_url>/<slug>.md`` with retries.
:class:`DocumentStore` wraps a source with the registry check and error
mapping every caller relies on:

* unknown slugs raise :class:`~saros_docs.errors.DocumentNotFoundError` before
  the source is touched;
* any read failure, including a timeout, raises
  :class:`~saros_docs.errors.SourceUnavailableError`.

Reads run in a worker thread so concurrent loads can overlap.

Example
-------
>>> import asyncio
>>> from pathlib import Path
>>> from saros_docs.registry import SlugRegistry
>>> from saros_docs.storage import DocumentStore, FileSystemSource
>>> store = DocumentStore(SlugRegistry.default(), FileSystemSource(Path("docs")))
>>> record = asyncio.run(store.fetch("saros-docs-index"))  # doctest: +SKIP
>>> record.canonical_path  # doctest: +SKIP
'/docs/saros-docs-index'
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import typing as typ

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._constants import CANONICAL_PATH_TEMPLATE, DEFAULT_TITLE
from .errors import DocumentNotFoundError, SourceUnavailableError
from .markdown_parser import extract_title

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .registry import SlugRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ContentSource(typ.Protocol):
    """Synchronous read access to stored document bodies."""

    def read(self, slug: str) -> str:
        """Return the stored text for ``slug`` or raise on failure."""
        ...


@dc.dataclass(frozen=True, slots=True)
class DocumentRecord:
    """A loaded document with its derived metadata.

    Attributes
    ----------
    slug : str
        Registry identifier of the document.
    raw_text : str
        Document source exactly as stored.
    title : str
        First level-one heading of ``raw_text`` or the configured default.
    canonical_path : str
        Site path of the rendered document (``/docs/<slug>``).
    """

    slug: str
    raw_text: str
    title: str
    canonical_path: str


class FileSystemSource:
    """Read ``<docs_dir>/<slug>.md`` files as UTF-8."""

    def __init__(self, docs_dir: Path, *, suffix: str = ".md") -> None:
        self.docs_dir = docs_dir
        self.suffix = suffix

    def path_for(self, slug: str) -> Path:
        """Return the file path backing ``slug``."""
        return self.docs_dir / f"{slug}{self.suffix}"

    def read(self, slug: str) -> str:
        """Return the decoded file contents for ``slug``."""
        return self.path_for(slug).read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"FileSystemSource({str(self.docs_dir)!r})"


class HttpSource:
    """Fetch ``<base_url>/<slug>.md`` over HTTP(S) with retries."""

    def __init__(
        self,
        base_url: str,
        *,
        suffix: str = ".md",
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the source and its pooled session.

        Parameters
        ----------
        base_url : str
            URL prefix the slug filename is appended to.
        suffix : str, optional
            Filename suffix appended to the slug. Defaults to ``".md"``.
        session : requests.Session, optional
            Preconfigured session; defaults to one mounted with a retrying
            adapter for idempotent requests.
        timeout : float, optional
            Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.suffix = suffix
        self.timeout = timeout
        self._session = session or _retrying_session()

    def url_for(self, slug: str) -> str:
        """Return the URL backing ``slug``."""
        return f"{self.base_url}/{slug}{self.suffix}"

    def read(self, slug: str) -> str:
        """Download and return the document text for ``slug``."""
        resp = self._session.get(self.url_for(slug), timeout=self.timeout)
        resp.raise_for_status()
        resp.encoding = resp.encoding or "utf-8"
        return resp.text

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __repr__(self) -> str:
        return f"HttpSource({self.base_url!r})"


def _retrying_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class DocumentStore:
    """Registry-checked, failure-typed access to a :class:`ContentSource`."""

    def __init__(
        self,
        registry: SlugRegistry,
        source: ContentSource,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        default_title: str = DEFAULT_TITLE,
    ) -> None:
        """Bind the store to a registry and a storage source.

        Parameters
        ----------
        registry : SlugRegistry
            Registry consulted before any storage access.
        source : ContentSource
            Storage collaborator providing raw document text.
        timeout : float or None, optional
            Seconds a single load may take before it is treated as a storage
            failure; ``None`` disables the limit.
        default_title : str, optional
            Title used for documents without a level-one heading.
        """
        self.registry = registry
        self.source = source
        self.timeout = timeout
        self.default_title = default_title

    async def load(self, slug: str) -> str:
        """Return the raw text for ``slug``.

        Raises
        ------
        DocumentNotFoundError
            If ``slug`` is not registered; storage is not accessed.
        SourceUnavailableError
            If the source raises any exception while reading or the read times
            out.
        """
        if not self.registry.is_valid(slug):
            raise DocumentNotFoundError(slug)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.source.read, slug), timeout=self.timeout
            )
        except TimeoutError as exc:
            logger.warning("Timed out reading document %s from %r", slug, self.source)
            raise SourceUnavailableError(slug, "read timed out") from exc
        except Exception as exc:
            # any source failure is a storage failure, never a missing document
            logger.warning("Error reading document %s from %r: %r", slug, self.source, exc)
            raise SourceUnavailableError(slug, str(exc) or type(exc).__name__) from exc

    async def fetch(self, slug: str) -> DocumentRecord:
        """Return the :class:`DocumentRecord` for ``slug``.

        Raises the same errors as :meth:`load`.
        """
        raw_text = await self.load(slug)
        return DocumentRecord(
            slug=slug,
            raw_text=raw_text,
            title=extract_title(raw_text, self.default_title),
            canonical_path=CANONICAL_PATH_TEMPLATE.format(slug=slug),
        )


__all__ = [
    "DEFAULT_TIMEOUT",
    "ContentSource",
    "DocumentRecord",
    "DocumentStore",
    "FileSystemSource",
    "HttpSource",
]

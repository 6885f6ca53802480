"""Unit tests for content sources and the registry-checked document store."""

from __future__ import annotations

import asyncio
import time
import typing as typ

import pytest
import requests

from saros_docs.errors import DocumentNotFoundError, SourceUnavailableError
from saros_docs.registry import DocumentEntry, SlugRegistry
from saros_docs.storage import DocumentStore, FileSystemSource, HttpSource

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import MemorySource


def _registry(*slugs: str) -> SlugRegistry:
    return SlugRegistry(DocumentEntry(slug, slug.title()) for slug in slugs)


class _SlowSource:
    def read(self, slug: str) -> str:
        time.sleep(0.5)
        return f"# {slug}"


class _Response:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code
        self.encoding: str | None = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            msg = f"{self.status_code} error"
            raise requests.HTTPError(msg)


class _Session:
    def __init__(self, responses: dict[str, _Response]) -> None:
        self.responses = responses
        self.requested: list[tuple[str, float]] = []
        self.closed = False

    def get(self, url: str, timeout: float = 30) -> _Response:
        self.requested.append((url, timeout))
        return self.responses.get(url, _Response("", 404))

    def close(self) -> None:
        self.closed = True


def test_unknown_slug_never_reaches_storage(make_source: type[MemorySource]) -> None:
    """An unregistered slug fails before the source is touched."""
    source = make_source({"intro": "# Intro"})
    store = DocumentStore(_registry("a", "b"), source)

    with pytest.raises(DocumentNotFoundError) as excinfo:
        asyncio.run(store.load("intro"))

    assert excinfo.value.slug == "intro"
    assert source.reads == [], "storage must not be accessed for unknown slugs"


def test_fetch_builds_record(make_source: type[MemorySource]) -> None:
    source = make_source({"guide": "Intro\n\n# Guide Title\n\nBody"})
    store = DocumentStore(_registry("guide"), source)

    record = asyncio.run(store.fetch("guide"))

    assert record.slug == "guide"
    assert record.title == "Guide Title"
    assert record.canonical_path == "/docs/guide"
    assert record.raw_text == "Intro\n\n# Guide Title\n\nBody"


def test_fetch_uses_default_title(make_source: type[MemorySource]) -> None:
    store = DocumentStore(
        _registry("plain"),
        make_source({"plain": "No heading here."}),
        default_title="Saros SDK Documentation",
    )
    assert asyncio.run(store.fetch("plain")).title == "Saros SDK Documentation"


def test_read_failure_maps_to_source_unavailable(
    make_source: type[MemorySource],
) -> None:
    store = DocumentStore(_registry("a"), make_source({}, failing=["a"]))

    with pytest.raises(SourceUnavailableError) as excinfo:
        asyncio.run(store.load("a"))

    assert excinfo.value.slug == "a"
    assert "simulated I/O failure" in str(excinfo.value)


def test_registered_but_missing_file_is_a_source_failure(
    make_source: type[MemorySource],
) -> None:
    """A registered slug with no stored body is a storage error, not a 404."""
    store = DocumentStore(_registry("a"), make_source({}))
    with pytest.raises(SourceUnavailableError):
        asyncio.run(store.load("a"))


@pytest.mark.parametrize(
    "error",
    [ValueError("corrupt index"), KeyError("b"), RuntimeError("backend offline")],
    ids=["value-error", "key-error", "runtime-error"],
)
def test_any_source_exception_maps_to_source_unavailable(
    make_source: type[MemorySource], error: Exception
) -> None:
    """Whatever a source raises, a registered slug fails as a storage error."""
    store = DocumentStore(_registry("b"), make_source({}, errors={"b": error}))

    with pytest.raises(SourceUnavailableError) as excinfo:
        asyncio.run(store.load("b"))

    assert excinfo.value.slug == "b"
    assert excinfo.value.__cause__ is error


def test_slow_read_times_out() -> None:
    store = DocumentStore(_registry("slow"), _SlowSource(), timeout=0.05)

    with pytest.raises(SourceUnavailableError) as excinfo:
        asyncio.run(store.load("slow"))

    assert excinfo.value.reason == "read timed out"


def test_filesystem_source_reads_markdown(tmp_path: Path) -> None:
    (tmp_path / "intro.md").write_text("# Intro\n\nÜnïcode body\n", encoding="utf-8")
    store = DocumentStore(_registry("intro", "missing"), FileSystemSource(tmp_path))

    record = asyncio.run(store.fetch("intro"))
    assert record.title == "Intro"
    assert "Ünïcode" in record.raw_text

    with pytest.raises(SourceUnavailableError):
        asyncio.run(store.load("missing"))


def test_filesystem_source_rejects_invalid_utf8(tmp_path: Path) -> None:
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")
    store = DocumentStore(_registry("bad"), FileSystemSource(tmp_path))
    with pytest.raises(SourceUnavailableError):
        asyncio.run(store.load("bad"))


def test_http_source_fetches_by_slug() -> None:
    session = _Session({"https://raw.example/docs/intro.md": _Response("# Intro")})
    source = HttpSource(
        "https://raw.example/docs/",
        session=typ.cast("requests.Session", session),
        timeout=5,
    )
    store = DocumentStore(_registry("intro", "gone"), source)

    assert asyncio.run(store.load("intro")) == "# Intro"
    assert session.requested == [("https://raw.example/docs/intro.md", 5)]

    with pytest.raises(SourceUnavailableError):
        asyncio.run(store.load("gone"))

    source.close()
    assert session.closed

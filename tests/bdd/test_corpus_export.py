"""Behaviour tests for the whole-corpus export and slug rejection.

The scenarios in ``corpus_export.feature`` build a pipeline over an in-memory
source whose reads can be made to fail, then check that the corpus export keeps
registry order with a placeholder standing in for the unreadable document, and
that unknown slugs are answered with a 404 without any storage access.

Usage
-----
Run ``pytest tests/bdd/test_corpus_export.py -v``. No network access or
files on disk are needed.
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from saros_docs._constants import CORPUS_SEPARATOR
from saros_docs.export import placeholder_segment
from saros_docs.responses import TextResponse, document_response

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from saros_docs.pipeline import DocsPipeline

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "corpus_export.feature"
)
scenarios(FEATURE_FILE)

ORIGIN = "https://docs.example"


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"failing": [], "bodies": {}}


def _pipeline(
    scenario_state: dict[str, object],
    build_pipeline: cabc.Callable[..., DocsPipeline],
) -> DocsPipeline:
    if "pipeline" not in scenario_state:
        slugs = typ.cast("list[str]", scenario_state["slugs"])
        documents = {slug: f"# Doc {slug.upper()}\n\nBody of {slug}.\n" for slug in slugs}
        documents.update(typ.cast("dict[str, str]", scenario_state["bodies"]))
        scenario_state["pipeline"] = build_pipeline(
            documents, failing=typ.cast("list[str]", scenario_state["failing"])
        )
    return typ.cast("DocsPipeline", scenario_state["pipeline"])


@given(parsers.parse('a registry with slugs "{slugs}"'))
def given_registry(slugs: str, scenario_state: dict[str, object]) -> None:
    """Record the registry slugs in order."""
    scenario_state["slugs"] = slugs.split(",")


@given(parsers.parse('storage fails to read "{slug}"'))
def given_failing_slug(slug: str, scenario_state: dict[str, object]) -> None:
    """Mark ``slug`` as unreadable in the stubbed source."""
    typ.cast("list[str]", scenario_state["failing"]).append(slug)


@given(parsers.parse('document "{slug}" contains a thematic break'))
def given_thematic_break(slug: str, scenario_state: dict[str, object]) -> None:
    """Give ``slug`` a body split by a ``---`` thematic break."""
    bodies = typ.cast("dict[str, str]", scenario_state["bodies"])
    bodies[slug] = f"# Doc {slug.upper()}\n\nPart one\n\n---\n\nPart two\n"


@when("the corpus is exported")
def when_corpus_exported(
    scenario_state: dict[str, object],
    build_pipeline: cabc.Callable[..., DocsPipeline],
) -> None:
    """Run the corpus export and split it into segments."""
    pipeline = _pipeline(scenario_state, build_pipeline)
    artifact = asyncio.run(pipeline.exporter.export_all(ORIGIN))
    scenario_state["segments"] = artifact.body.split(CORPUS_SEPARATOR)


@when(parsers.parse('the document "{slug}" is requested'))
def when_document_requested(
    slug: str,
    scenario_state: dict[str, object],
    build_pipeline: cabc.Callable[..., DocsPipeline],
) -> None:
    """Request the single-document export for ``slug``."""
    pipeline = _pipeline(scenario_state, build_pipeline)
    scenario_state["response"] = asyncio.run(
        document_response(pipeline.exporter, slug, ORIGIN)
    )


@then(parsers.parse("the export has {count:d} segments"))
def then_segment_count(count: int, scenario_state: dict[str, object]) -> None:
    segments = typ.cast("list[str]", scenario_state["segments"])
    assert len(segments) == count, f"expected {count} segments, got {len(segments)}"


@then(parsers.parse('segment {index:d} is the placeholder for "{slug}"'))
def then_placeholder(index: int, slug: str, scenario_state: dict[str, object]) -> None:
    segments = typ.cast("list[str]", scenario_state["segments"])
    assert segments[index - 1] == placeholder_segment(slug)


@then(
    parsers.parse(
        'segments {first:d} and {second:d} export documents "{first_slug}" and "{second_slug}"'
    )
)
def then_exported_documents(
    first: int,
    second: int,
    first_slug: str,
    second_slug: str,
    scenario_state: dict[str, object],
) -> None:
    segments = typ.cast("list[str]", scenario_state["segments"])
    for index, slug in ((first, first_slug), (second, second_slug)):
        segment = segments[index - 1]
        assert segment.startswith(f"# Doc {slug.upper()}\nURL: /docs/{slug}\n"), (
            f"segment {index} should export {slug}"
        )
        assert segment.endswith(f"Body of {slug}.\n")


@then(parsers.parse("the response status is {status:d}"))
def then_status(status: int, scenario_state: dict[str, object]) -> None:
    response = typ.cast("TextResponse", scenario_state["response"])
    assert response.status == status


@then("storage was never read")
def then_storage_untouched(scenario_state: dict[str, object]) -> None:
    pipeline = typ.cast("DocsPipeline", scenario_state["pipeline"])
    reads = pipeline.store.source.reads  # type: ignore[attr-defined]
    assert reads == [], "unknown slugs must be rejected before storage access"

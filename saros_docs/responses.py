"""Map export results onto HTTP-shaped plain-text responses.

These helpers are the boundary between the export pipeline and whatever serves
it. They choose status codes, fixed error bodies, and headers; they do not own
a server. Failures are logged here and never propagate to the caller.

Example
-------
>>> import asyncio
>>> from saros_docs.responses import document_response
>>> response = asyncio.run(
...     document_response(exporter, "unknown", "https://docs.example")
... )  # doctest: +SKIP
>>> response.status, response.body  # doctest: +SKIP
(<HTTPStatus.NOT_FOUND: 404>, 'Documentation not found')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from http import HTTPStatus

from ._constants import NOT_FOUND_BODY, SOURCE_ERROR_BODY, TEXT_CONTENT_TYPE
from .errors import DocumentNotFoundError, SourceUnavailableError

if typ.TYPE_CHECKING:
    from .export import DocumentExporter, ExportArtifact

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = f"{TEXT_CONTENT_TYPE}; charset=utf-8"


@dc.dataclass(frozen=True, slots=True)
class TextResponse:
    """Status, plain-text body, and headers for one request."""

    status: HTTPStatus
    body: str
    headers: dict[str, str] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return ``True`` for a 200 response."""
        return self.status is HTTPStatus.OK


def _artifact_response(artifact: ExportArtifact) -> TextResponse:
    return TextResponse(
        status=HTTPStatus.OK,
        body=artifact.body,
        headers={
            "Content-Type": f"{artifact.mime_type}; charset=utf-8",
            "Cache-Control": artifact.cache_hint.header_value(),
        },
    )


def _error_response(status: HTTPStatus, body: str) -> TextResponse:
    return TextResponse(
        status=status, body=body, headers={"Content-Type": CONTENT_TYPE_HEADER}
    )


async def document_response(
    exporter: DocumentExporter, slug: str, origin: str
) -> TextResponse:
    """Return the single-document export response for ``slug``.

    Returns 200 with the export body, 404 with ``Documentation not found``
    for unregistered slugs, or 500 with ``Error reading documentation`` when
    storage fails.
    """
    try:
        artifact = await exporter.export_one(slug, origin)
    except DocumentNotFoundError:
        logger.info("Rejected request for unknown document %s", slug)
        return _error_response(HTTPStatus.NOT_FOUND, NOT_FOUND_BODY)
    except SourceUnavailableError:
        logger.exception("Error reading documentation file for %s", slug)
        return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, SOURCE_ERROR_BODY)
    return _artifact_response(artifact)


async def corpus_response(exporter: DocumentExporter, origin: str) -> TextResponse:
    """Return the whole-corpus export response; always 200."""
    artifact = await exporter.export_all(origin)
    return _artifact_response(artifact)


__all__ = ["TextResponse", "corpus_response", "document_response"]

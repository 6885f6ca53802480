"""Cyclopts CLI entrypoint for exporting and pre-rendering the docs corpus.

The ``saros-docs`` console script defined here lists the registered slugs,
prints single-document or whole-corpus plain-text exports, dumps the
presentation blocks of a document as JSON, and pre-renders the static site.
Every command reads ``config/docs.yaml`` unless ``--config`` (or
``SAROS_DOCS_CONFIG``) points elsewhere.

Examples
--------
Print the plain-text export of one document:

>>> from saros_docs.cli import app
>>> app(["export", "saros-tutorial-swap"])  # doctest: +SKIP

Pre-render every page into a custom directory:

>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import load_site_config
from .errors import DocumentError
from .generator import SiteBuilder
from .logging_setup import DEFAULT_LEVEL_NAME, configure_logging
from .pipeline import DocsPipeline
from .responses import corpus_response, document_response

DEFAULT_CONFIG = Path("config/docs.yaml")

app = App(
    name="saros-docs",
    config=cyclopts.config.Env("SAROS_DOCS_", command=False),  # type: ignore[unknown-argument]
)

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to docs config", env_var="SAROS_DOCS_CONFIG")
]
OriginOption = typ.Annotated[
    str | None,
    Parameter(help="Origin quoted in Source lines (defaults to site.origin)"),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _pipeline(config: Path) -> DocsPipeline:
    return DocsPipeline.from_config(load_site_config(config))


@app.command(help="List every registered document slug in export order.")
def slugs(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print one slug per line, in registry order."""
    registry = load_site_config(config).registry
    for slug in registry.all():
        print(slug)


@app.command(help="Print the plain-text export of a single document.")
def export(
    slug: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    origin: OriginOption = None,
) -> None:
    """Print the export for ``slug``.

    Parameters
    ----------
    slug : str
        Registered document identifier.
    config : Path, optional
        Path to the docs configuration file.
    origin : str or None, optional
        Origin for the ``Source:`` line; defaults to ``site.origin``.

    Raises
    ------
    SystemExit
        With status 1 when the document is unknown or unreadable; the fixed
        error message is written to stderr.
    """
    pipeline = _pipeline(config)
    response = asyncio.run(
        document_response(pipeline.exporter, slug, origin or pipeline.config.site.origin)
    )
    if not response.ok:
        print(response.body, file=sys.stderr)
        raise SystemExit(1)
    print(response.body)


@app.command(help="Print or write the whole-corpus plain-text export.")
def export_all(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    origin: OriginOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
) -> None:
    """Export every registered document; unreadable ones become placeholders."""
    pipeline = _pipeline(config)
    response = asyncio.run(
        corpus_response(pipeline.exporter, origin or pipeline.config.site.origin)
    )
    if output is None:
        print(response.body)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(response.body, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Print the presentation blocks of a document as JSON.")
def render(
    slug: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    keep_heading: typ.Annotated[
        bool, Parameter(help="Do not suppress the leading level-one heading")
    ] = False,
) -> None:
    """Render ``slug`` and print its block sequence as indented JSON."""
    pipeline = _pipeline(config)
    try:
        raw_text = asyncio.run(pipeline.store.load(slug))
    except DocumentError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc
    blocks = pipeline.renderer.render(raw_text, suppress_leading_heading=not keep_heading)
    print(msgspec_json.format(msgspec_json.encode(blocks), indent=2).decode("utf-8"))


@app.command(help="Pre-render every document, its export, and the corpus export.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    origin: OriginOption = None,
) -> None:
    """Write the static site and print each generated path."""
    pipeline = _pipeline(config)
    written = SiteBuilder(pipeline, output_dir=output_dir, origin=origin).run()
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.meta.default
def launcher(
    *tokens: typ.Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: typ.Annotated[
        str, Parameter(help="Logging level", env_var="SAROS_DOCS_LOG_LEVEL")
    ] = DEFAULT_LEVEL_NAME,
) -> None:
    """Configure logging, then dispatch to the requested subcommand."""
    configure_logging(log_level)
    app(tokens)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``saros-docs`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app.meta()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

"""Pre-render the whole corpus into a static site.

:class:`SiteBuilder` enumerates every registered slug, loads each document
once, and writes:

* ``docs/<slug>.html``: the rendered page (first level-one heading moved into
  the page header);
* ``api/llm/<slug>.txt``: the single-document plain-text export;
* ``llms-full.txt``: the corpus export;
* ``index.html``: the default page rendered at the site root.

Example
-------
>>> from pathlib import Path
>>> from saros_docs.config import load_site_config
>>> from saros_docs.pipeline import DocsPipeline
>>> from saros_docs.generator import SiteBuilder
>>> pipeline = DocsPipeline.from_config(
...     load_site_config(Path("config/docs.yaml"))
... )  # doctest: +SKIP
>>> SiteBuilder(pipeline).run()  # doctest: +SKIP
[PosixPath('public/docs/saros-docs-index.html'), ...]
"""

from __future__ import annotations

import asyncio
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from saros_docs._constants import CORPUS_FILENAME
from saros_docs.enumeration import generate_static_params
from saros_docs.export import format_document

from .html_renderer import HtmlBlockRenderer

if typ.TYPE_CHECKING:
    from saros_docs.pipeline import DocsPipeline
    from saros_docs.storage import DocumentRecord


class SiteBuilder:
    """Render every enumerated document into HTML and plain-text files."""

    def __init__(
        self,
        pipeline: DocsPipeline,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
        origin: str | None = None,
    ) -> None:
        """Initialize the builder with its pipeline and template context.

        Parameters
        ----------
        pipeline : DocsPipeline
            Configured store, exporter, and renderer.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        output_dir : Path, optional
            Override for the output directory; defaults to
            ``config.build.output_dir``.
        origin : str, optional
            Override for the origin quoted in exports; defaults to
            ``config.site.origin``.
        """
        self.pipeline = pipeline
        config = pipeline.config
        self.output_dir = output_dir or config.build.output_dir
        self.origin = origin or config.site.origin
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.html_renderer = HtmlBlockRenderer(config.build.pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def run(self) -> list[Path]:
        """Build the site synchronously and return the written paths."""
        return asyncio.run(self.build())

    async def build(self) -> list[Path]:
        """Render every document and the corpus export.

        Returns
        -------
        list[Path]
            Written files: pages and exports in registry order, then the
            corpus export and ``index.html``.

        Raises
        ------
        SourceUnavailableError
            If any document cannot be read; a partial page set is never
            reported as success.
        """
        store = self.pipeline.store
        slugs = [params["slug"] for params in generate_static_params(self.pipeline.registry)]
        records = await asyncio.gather(*(store.fetch(slug) for slug in slugs))
        generated_at = dt.datetime.now(dt.UTC)

        written: list[Path] = []
        for record in records:
            written.append(
                self._write(
                    Path("docs") / f"{record.slug}.html",
                    self.render_page(record, root_prefix="../", generated_at=generated_at),
                )
            )
            export_body = format_document(
                record, self.origin, self.pipeline.exporter.site_name
            )
            written.append(
                self._write(Path("api") / "llm" / f"{record.slug}.txt", export_body)
            )

        corpus = await self.pipeline.exporter.export_all(self.origin)
        written.append(self._write(Path(CORPUS_FILENAME), corpus.body))

        default_slug = self.pipeline.config.default_slug()
        index_record = next(record for record in records if record.slug == default_slug)
        written.append(
            self._write(
                Path("index.html"),
                self.render_page(index_record, root_prefix="", generated_at=generated_at),
            )
        )
        return written

    def render_page(
        self,
        record: DocumentRecord,
        *,
        root_prefix: str = "",
        generated_at: dt.datetime | None = None,
    ) -> str:
        """Return the full HTML page for ``record``.

        ``root_prefix`` is prepended to site-relative links so pages written in
        subdirectories still resolve navigation and export links.
        """
        blocks = self.pipeline.renderer.render(
            record.raw_text, suppress_leading_heading=True
        )
        site = self.pipeline.config.site
        context = {
            "site": site,
            "record": record,
            "html_title": f"{record.title} | {site.name}",
            "content_html": self.html_renderer.render(blocks),
            "nav_groups": self._nav_groups(record.slug, root_prefix),
            "llm_href": f"{root_prefix}api/llm/{record.slug}.txt",
            "corpus_href": f"{root_prefix}{CORPUS_FILENAME}",
            "home_href": f"{root_prefix}index.html",
            "pygments_css": self.html_renderer.stylesheet,
            "generated_at": generated_at or dt.datetime.now(dt.UTC),
        }
        return self.template.render(**context)

    def _nav_groups(self, current: str, root_prefix: str) -> list[dict[str, typ.Any]]:
        """Build sidebar navigation groups with links relative to the page."""
        return [
            {
                "label": group.label,
                "entries": [
                    {
                        "label": name,
                        "href": f"{root_prefix}docs/{slug}.html",
                        "is_current": slug == current,
                    }
                    for slug, name in group.items
                ],
            }
            for group in self.pipeline.registry.groups()
        ]

    def _write(self, relative: Path, content: str) -> Path:
        path = self.output_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


__all__ = ["SiteBuilder"]

"""Load docs configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from saros_docs.errors import DocsConfigError
from saros_docs.registry import SlugRegistry
from saros_docs.storage import DEFAULT_TIMEOUT

from .helpers import (
    _bool,
    _build_entries,
    _build_navigation,
    _mapping,
    _non_negative_int,
    _optional_str,
    _timeout,
)
from .models import (
    BuildSettings,
    ExportSettings,
    SiteConfig,
    SiteSettings,
    StorageSettings,
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the document corpus.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``config/docs.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration including the slug registry.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    DocsConfigError
        If documents are missing, navigation references unknown slugs, the
        storage backend is ambiguous, or a value has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from saros_docs.config import load_site_config
    >>> config = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
    >>> config.registry.all()[0]  # doctest: +SKIP
    'saros-docs-index'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    registry = SlugRegistry(
        _build_entries(raw.get("documents")),
        _build_navigation(raw.get("navigation")),
    )
    return SiteConfig(
        registry=registry,
        site=_build_site(_mapping(raw, "site")),
        storage=_build_storage(_mapping(raw, "storage")),
        export=_build_export(_mapping(raw, "export")),
        build=_build_build(_mapping(raw, "build")),
    )


def _build_site(payload: typ.Mapping[str, typ.Any]) -> SiteSettings:
    base = SiteSettings()
    return SiteSettings(
        name=_optional_str(payload.get("name")) or base.name,
        origin=(_optional_str(payload.get("origin")) or base.origin).rstrip("/"),
        default_title=_optional_str(payload.get("default_title")) or base.default_title,
        default_page=_optional_str(payload.get("default_page")),
    )


def _build_storage(payload: typ.Mapping[str, typ.Any]) -> StorageSettings:
    docs_dir = _optional_str(payload.get("docs_dir"))
    source_url = _optional_str(payload.get("source_url"))
    if docs_dir and source_url:
        msg = "Set only one of 'storage.docs_dir' or 'storage.source_url'."
        raise DocsConfigError(msg)
    if not docs_dir and not source_url:
        docs_dir = "src/docs"
    timeout = _timeout(payload["timeout"]) if "timeout" in payload else DEFAULT_TIMEOUT
    return StorageSettings(
        docs_dir=Path(docs_dir) if docs_dir else None,
        source_url=source_url,
        timeout=timeout,
    )


def _build_export(payload: typ.Mapping[str, typ.Any]) -> ExportSettings:
    base = ExportSettings()
    return ExportSettings(
        page_max_age=_non_negative_int(
            payload.get("page_max_age", base.page_max_age), field="export.page_max_age"
        ),
        corpus_max_age=_non_negative_int(
            payload.get("corpus_max_age", base.corpus_max_age),
            field="export.corpus_max_age",
        ),
        corpus_immutable=_bool(
            payload.get("corpus_immutable", base.corpus_immutable),
            field="export.corpus_immutable",
        ),
        retries=_non_negative_int(
            payload.get("retries", base.retries), field="export.retries"
        ),
    )


def _build_build(payload: typ.Mapping[str, typ.Any]) -> BuildSettings:
    base = BuildSettings()
    output_dir = _optional_str(payload.get("output_dir"))
    return BuildSettings(
        output_dir=Path(output_dir) if output_dir else base.output_dir,
        pygments_style=_optional_str(payload.get("pygments_style"))
        or base.pygments_style,
    )


__all__ = ["load_site_config"]

"""Load and validate the docs site configuration.

This subpackage parses the project's ``docs.yaml`` file into frozen
dataclasses: the :class:`~saros_docs.registry.SlugRegistry` of documents and
navigation groups, plus site, storage, export, and build settings. The primary
entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from saros_docs.config import load_site_config
>>> site = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
>>> site.registry.is_valid("saros-tutorial-swap")  # doctest: +SKIP
True
"""

from .loader import load_site_config
from .models import (
    BuildSettings,
    DocsConfigError,
    ExportSettings,
    SiteConfig,
    SiteSettings,
    StorageSettings,
)

__all__ = [
    "BuildSettings",
    "DocsConfigError",
    "ExportSettings",
    "SiteConfig",
    "SiteSettings",
    "StorageSettings",
    "load_site_config",
]

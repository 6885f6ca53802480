"""Transform and export the Saros SDK documentation corpus.

This package resolves document slugs against a fixed registry, loads their
Markdown, renders it into typed presentation blocks, and produces the
plain-text exports consumed by language-model tooling. The CLI entry points
are used by ``saros-docs`` to print exports and pre-render the static site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from saros_docs import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

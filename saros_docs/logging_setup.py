"""Logging configuration for the ``saros-docs`` command."""

from __future__ import annotations

import logging
import typing as typ

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL_NAME: typ.Final[str] = "WARNING"

# stdout carries command output such as rendered JSON
console = Console(stderr=True)

if typ.TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _saros_managed: bool

else:
    _ManagedRichHandler = RichHandler


def resolve_level(level_name: str) -> int:
    """Return the numeric level for ``level_name``, defaulting to ``WARNING``.

    Examples
    --------
    >>> resolve_level("debug") == logging.DEBUG
    True
    >>> resolve_level("chatty") == logging.WARNING
    True
    """
    level = getattr(logging, level_name.strip().upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level_name: str = DEFAULT_LEVEL_NAME) -> RichHandler:
    """Install a single Rich handler on the root logger and set its level.

    Calling this again reuses the handler it installed before, so repeated CLI
    invocations in one process do not duplicate log lines.
    """
    root_logger = logging.getLogger()
    managed: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(
            handler, "_saros_managed", False
        ):
            managed = typ.cast("_ManagedRichHandler", handler)
            break

    if managed is None:
        root_logger.handlers.clear()
        managed = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        managed.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        managed._saros_managed = True
        root_logger.addHandler(managed)

    root_logger.setLevel(resolve_level(level_name))
    logging.captureWarnings(True)
    return managed


__all__ = ["DEFAULT_LEVEL_NAME", "configure_logging", "console", "resolve_level"]

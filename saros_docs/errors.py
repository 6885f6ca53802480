"""Typed failures raised when configuring or resolving documents."""

from __future__ import annotations


class DocsConfigError(ValueError):
    """Raised when the docs configuration or registry definition is invalid."""


class DocumentError(RuntimeError):
    """Base class for failures tied to a single document slug."""

    def __init__(self, slug: str, message: str) -> None:
        super().__init__(message)
        self.slug = slug


class DocumentNotFoundError(DocumentError):
    """Raised when a slug is not a member of the slug registry."""

    def __init__(self, slug: str) -> None:
        super().__init__(slug, f"Unknown document '{slug}'.")


class SourceUnavailableError(DocumentError):
    """Raised when storage cannot produce the text of a registered document."""

    def __init__(self, slug: str, reason: str | None = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(slug, f"Could not read document '{slug}'{detail}")
        self.reason = reason


__all__ = [
    "DocsConfigError",
    "DocumentError",
    "DocumentNotFoundError",
    "SourceUnavailableError",
]

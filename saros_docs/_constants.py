"""Common literal values used across saros_docs.

These constants keep export markers, error bodies, and output filenames
centralized so the exporter, the response mapping, the static builder, and the
tests all agree on the same plain-text contract.

Examples
--------
>>> from saros_docs import _constants
>>> _constants.CANONICAL_PATH_TEMPLATE.format(slug="saros-docs-index")
'/docs/saros-docs-index'
>>> _constants.CORPUS_SEPARATOR.strip()
'---'
"""

DEFAULT_TITLE = "Documentation"
DEFAULT_SITE_NAME = "Saros SDK Docs"

TEXT_CONTENT_TYPE = "text/plain"

CANONICAL_PATH_TEMPLATE = "/docs/{slug}"
CORPUS_FILENAME = "llms-full.txt"

EXPORT_RULE = "***"
CORPUS_SEPARATOR = "\n\n---\n\n"

NOT_FOUND_BODY = "Documentation not found"
SOURCE_ERROR_BODY = "Error reading documentation"

PAGE_CACHE_MAX_AGE = 3600
CORPUS_CACHE_MAX_AGE = 86400

"""mdserver — serve Markdown documents as HTML pages with a freshness-checked cache."""

from mdserver.cache.document import DocumentCache
from mdserver.errors.exceptions import (
    DocumentError,
    DocumentInternalError,
    DocumentNotFoundError,
)
from mdserver.types import Document, FailureKind

__version__ = "0.1.0"

__all__ = [
    "Document",
    "DocumentCache",
    "DocumentError",
    "DocumentInternalError",
    "DocumentNotFoundError",
    "FailureKind",
]

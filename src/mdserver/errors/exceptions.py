"""Custom exception hierarchy for mdserver."""

from __future__ import annotations

from mdserver.types import FailureKind


class MdServerError(Exception):
    """Base exception for all mdserver errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class DocumentError(MdServerError):
    """A document could not be served.

    ``kind`` tells the web layer which response to produce; ``original`` keeps
    the underlying OS or render error for server-side logging.
    """

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(
        self,
        message: str = "",
        path: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original

    @property
    def http_status(self) -> int:
        return self.kind.http_status


class DocumentNotFoundError(DocumentError):
    """Source file is missing, or the path names a directory."""

    kind = FailureKind.NOT_FOUND


class DocumentInternalError(DocumentError):
    """Stat, read, decode or render failure other than a missing file."""

    kind = FailureKind.INTERNAL


class ConfigError(MdServerError):
    """Invalid or unreadable server configuration."""

"""Error handling — exception hierarchy and failure classification."""

from mdserver.errors.exceptions import (
    ConfigError,
    DocumentError,
    DocumentInternalError,
    DocumentNotFoundError,
    MdServerError,
)

__all__ = [
    "MdServerError",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentInternalError",
    "ConfigError",
]

"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Network
DEFAULT_LISTEN = "127.0.0.1:3000"

# Directories, relative to the working directory
DEFAULT_STATIC_DIR = "./public/static"
DEFAULT_UPLOAD_DIR = "./public/uploads"
DEFAULT_POSTS_DIR = "posts"
DEFAULT_TEMPLATES_DIR = None

# Document layout
DOCUMENT_SUFFIX = ".md"
INDEX_DOCUMENT = "index.md"

# Cache
DEFAULT_COALESCE_RENDERS = True

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "listen": DEFAULT_LISTEN,
        "static_dir": DEFAULT_STATIC_DIR,
        "upload_dir": DEFAULT_UPLOAD_DIR,
        "posts_dir": DEFAULT_POSTS_DIR,
        "templates_dir": DEFAULT_TEMPLATES_DIR,
        "coalesce_renders": DEFAULT_COALESCE_RENDERS,
        "log_level": DEFAULT_LOG_LEVEL,
    }

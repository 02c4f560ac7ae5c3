"""URL page name → Markdown source path."""

from __future__ import annotations

import os

from mdserver.config.defaults import DOCUMENT_SUFFIX, INDEX_DOCUMENT


def resolve_document_path(posts_dir: str | os.PathLike[str], page: str) -> str:
    """Map a page name to its source file under ``posts_dir``.

    ``""`` is the index page (``<posts_dir>/index.md``); anything else maps to
    ``<posts_dir>/<page>.md``. The result is not checked for existence.
    """
    root = os.fspath(posts_dir)
    if not page:
        return os.path.join(root, INDEX_DOCUMENT)
    return os.path.join(root, page + DOCUMENT_SUFFIX)

"""Document cache — renders Markdown sources lazily and revalidates them by mtime.

A single ``DocumentCache`` is shared by every request thread. Lookups take the
shared guard of a :class:`ReadWriteLock`; publishing a freshly rendered
document takes the exclusive guard. Stat, read and render all happen outside
both guards, so slow renders of one file never hold up requests for another.

Staleness is detected lazily on access by comparing the cached
``source_version`` with the file's current ``st_mtime_ns``. A file rewritten
within the filesystem's timestamp resolution keeps its stamp and is not
re-rendered; this is accepted. An entry whose source has disappeared (or
turned into a directory) is dropped on the next access.

A finished render is published only if the source still carries the stamp it
was rendered from, so a slow render of an old version cannot replace a newer
entry. The caller that asked for it still gets the document it rendered.
"""

from __future__ import annotations

import logging
import os
import stat
import threading

from mdserver.cache.inflight import InflightRenders
from mdserver.cache.rwlock import ReadWriteLock
from mdserver.cache.stats import CacheStats
from mdserver.errors.exceptions import (
    DocumentError,
    DocumentInternalError,
    DocumentNotFoundError,
)
from mdserver.render.engine import MarkdownRenderer, Renderer, split_title
from mdserver.types import Document

logger = logging.getLogger(__name__)


class DocumentCache:
    """Path → rendered :class:`Document`, revalidated against the source's mtime.

    Entries are never evicted; the cache grows with the number of distinct
    documents ever served.
    """

    def __init__(
        self,
        renderer: Renderer | None = None,
        coalesce: bool = True,
    ) -> None:
        self._renderer: Renderer = renderer if renderer is not None else MarkdownRenderer()
        self._items: dict[str, Document] = {}
        self._lock = ReadWriteLock()
        self._inflight = InflightRenders() if coalesce else None
        self._stats = CacheStats()
        self._stats_lock = threading.Lock()

    @property
    def coalescing(self) -> bool:
        return self._inflight is not None

    def get(self, path: str | os.PathLike[str]) -> Document:
        """Return the rendered document for ``path``, rendering it if needed.

        Raises:
            DocumentNotFoundError: the path does not exist or is a directory.
            DocumentInternalError: any other stat, read, decode or render failure.
        """
        key = os.fspath(path)
        try:
            version = _source_version(key)
        except DocumentNotFoundError:
            self._forget(key)
            self._count(failures=1)
            raise
        except DocumentError:
            self._count(failures=1)
            raise

        with self._lock.read_locked():
            cached = self._items.get(key)
        if cached is not None and cached.source_version == version:
            self._count(hits=1)
            return cached

        self._count(misses=1)
        try:
            if self._inflight is None:
                return self._render(key, version)
            return self._inflight.run((key, version), lambda: self._render(key, version))
        except DocumentError:
            self._count(failures=1)
            raise

    def peek(self, path: str | os.PathLike[str]) -> Document | None:
        """Return the cached entry for ``path`` without touching the filesystem."""
        with self._lock.read_locked():
            return self._items.get(os.fspath(path))

    def stats(self) -> CacheStats:
        with self._stats_lock:
            snapshot = self._stats.model_copy()
        snapshot.entries = len(self)
        return snapshot

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._items)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        with self._lock.read_locked():
            return os.fspath(path) in self._items

    def _render(self, path: str, version: int) -> Document:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise DocumentInternalError(f"Cannot read {path}: {e}", path=path, original=e) from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentInternalError(
                f"{path} is not valid UTF-8: {e}", path=path, original=e
            ) from e

        title, body = split_title(text)
        try:
            markup = self._renderer(body)
        except Exception as e:
            raise DocumentInternalError(
                f"Rendering {path} failed: {e}", path=path, original=e
            ) from e

        document = Document(title=title, body=markup, source_version=version)
        self._count(renders=1)

        # The source may have moved on while rendering
        if _current_version(path) != version:
            logger.debug("Not caching %s (version %d): source changed", path, version)
            return document

        with self._lock.write_locked():
            self._items[path] = document
        logger.debug("Rendered %s (version %d)", path, version)
        return document

    def _forget(self, path: str) -> None:
        """Drop the entry for a source that is gone or became a directory."""
        with self._lock.read_locked():
            if path not in self._items:
                return
        with self._lock.write_locked():
            if self._items.pop(path, None) is not None:
                logger.debug("Dropped %s from cache", path)

    def _count(self, **deltas: int) -> None:
        with self._stats_lock:
            for field, delta in deltas.items():
                setattr(self._stats, field, getattr(self._stats, field) + delta)


def _source_version(path: str) -> int:
    """Stat ``path`` and return its mtime stamp, classifying failures."""
    try:
        st = os.stat(path)
    except FileNotFoundError as e:
        raise DocumentNotFoundError(f"{path} does not exist", path=path, original=e) from e
    except (OSError, ValueError) as e:
        raise DocumentInternalError(f"Cannot stat {path}: {e}", path=path, original=e) from e

    if stat.S_ISDIR(st.st_mode):
        raise DocumentNotFoundError(f"{path} is a directory", path=path)
    return st.st_mtime_ns


def _current_version(path: str) -> int | None:
    """Stamp of ``path`` right now, or None if it can no longer be served."""
    try:
        return _source_version(path)
    except DocumentError:
        return None

"""Per-key in-flight render tracking.

Concurrent callers asking for the same key while a computation for it is
running wait for that computation instead of starting their own. The first
caller (the leader) runs the function; everyone else gets its result or its
exception.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InflightRenders:
    """Collapses concurrent calls for the same key into one."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[Hashable, Future] = {}

    def run(self, key: Hashable, fn: Callable[[], T]) -> T:
        with self._lock:
            future = self._calls.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._calls[key] = future

        if not leader:
            logger.debug("Waiting on in-flight render for %s", key)
            return future.result()

        try:
            result = fn()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._calls.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._calls

"""In-process cache adapters.

``InMemoryCache`` keeps entries for a fixed time-to-live per scope. It is
per-process: with several instances each has its own copy. Every writer
evicts after mutating, and entries expire anyway.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from storefront.application.ports import Cache

logger = logging.getLogger(__name__)


class InMemoryCache(Cache):

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, scope: str, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get((scope, key))
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[(scope, key)]
                return None
            return value

    def put(self, scope: str, key: str, value: Any) -> None:
        with self._lock:
            self._entries[(scope, key)] = (self._clock() + self._ttl, value)

    def evict(self, scope: str, key: str) -> None:
        with self._lock:
            if self._entries.pop((scope, key), None) is not None:
                logger.debug("Evicted %s:%s", scope, key)

    def __len__(self) -> int:
        return len(self._entries)


class NullCache(Cache):
    """Never stores anything. Used when caching is disabled (TTL 0)."""

    def get(self, scope: str, key: str) -> Any | None:
        return None

    def put(self, scope: str, key: str, value: Any) -> None:
        pass

    def evict(self, scope: str, key: str) -> None:
        pass

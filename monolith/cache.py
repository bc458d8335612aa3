"""Per-run memo of retrieved payloads."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from .models import RetrievalKey

logger = logging.getLogger("monolith")


class RetrievalCache:
    """Map of :class:`RetrievalKey` to payload, filled at most once per key.

    The first caller to miss on a key runs the fetch while holding that
    key's lock; any concurrent caller asking for the same key blocks on the
    lock and then reads the stored value instead of fetching again. Entries
    are never replaced and live only as long as the cache object.
    """

    def __init__(self) -> None:
        self._entries: Dict[RetrievalKey, str] = {}
        self._key_locks: Dict[RetrievalKey, threading.Lock] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: RetrievalKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: RetrievalKey) -> Optional[str]:
        with self._lock:
            return self._entries.get(key)

    def _lookup(self, key: RetrievalKey) -> Optional[str]:
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
        return None

    def get_or_fetch(self, key: RetrievalKey, fetch: Callable[[], str]) -> str:
        """Return the cached payload for ``key``, calling ``fetch`` on a miss.

        Exceptions raised by ``fetch`` propagate and leave no entry behind.
        """
        cached = self._lookup(key)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            cached = self._lookup(key)
            if cached is not None:
                return cached
            try:
                with self._lock:
                    self.misses += 1
                value = fetch()
                with self._lock:
                    self._entries[key] = value
            finally:
                with self._lock:
                    self._key_locks.pop(key, None)
        logger.debug("Cached %s (%s, %d chars)", key.address, key.encoding.value, len(value))
        return value

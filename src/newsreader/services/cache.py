"""In-memory TTL cache for listing and scrape responses."""

from __future__ import annotations

import copy
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

__all__ = ["ResponseCache", "DEFAULT_MAX_KEYS"]

DEFAULT_MAX_KEYS = 200


class ResponseCache:
    """Keep JSON-ready payloads for ``ttl_seconds``.

    A TTL of zero or less disables the cache. When more than ``max_keys``
    entries are held the oldest ones are evicted.
    """

    def __init__(
        self,
        ttl_seconds: int,
        *,
        max_keys: int = DEFAULT_MAX_KEYS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_keys = max_keys
        self._clock = clock
        self._lock = threading.Lock()
        # entry shape: (stored_at, payload)
        self._entries: Dict[str, Tuple[float, Any]] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None

        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, payload = entry
            if now - stored_at > self.ttl_seconds:
                self._entries.pop(key, None)
                return None
            return copy.deepcopy(payload)

    def set(self, key: str, payload: Any) -> None:
        if not self.enabled:
            return

        now = self._clock()
        with self._lock:
            self._entries[key] = (now, copy.deepcopy(payload))
            overflow = len(self._entries) - self.max_keys
            if self.max_keys > 0 and overflow > 0:
                oldest = sorted(self._entries.items(), key=lambda item: item[1][0])
                for stale_key, _entry in oldest[:overflow]:
                    self._entries.pop(stale_key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

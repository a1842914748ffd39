"""
Expiring Cache

Small in-process key/value store where every entry expires a fixed number
of seconds after it was written. Used by the mentor directory so repeated
listing requests within the window skip the database.

Writes elsewhere (a mentor adding LinkedIn, say) do NOT invalidate entries;
a stale listing is served until the entry expires or clear() is called.
"""

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class ExpiringCache:
    """
    Usage:
        cache = ExpiringCache(ttl_seconds=300)
        cache.set("mentors_20", payload)
        if cache.is_valid("mentors_20"):
            payload = cache.get("mentors_20")

    The clock is injectable so tests can move time forward by hand.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # key -> (stored_at, ttl, value)
        self._entries: Dict[Hashable, Tuple[float, float, Any]] = {}

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        self._entries[key] = (self._clock(), self.ttl_seconds if ttl is None else ttl, value)

    def is_valid(self, key: Hashable) -> bool:
        """An entry is valid while clock() - stored_at < ttl."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        stored_at, ttl, _ = entry
        return self._clock() - stored_at < ttl

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Value for key, or default when absent or expired."""
        if not self.is_valid(key):
            self._entries.pop(key, None)
            return default
        return self._entries[key][2]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

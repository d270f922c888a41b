"""LRU cache with TTL for fetched guideline documents."""

from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Optional


class TTLCache:
    """Thread-safe LRU key/value cache with optional TTL.

    Evicts the least recently used entry when capacity is reached and
    treats entries older than ``ttl_seconds`` as missing.

    Example:
        cache = TTLCache(max_size=128, ttl_seconds=3600)

        text = cache.get(url)
        if text is None:
            text = await fetch(url)
            cache.put(url, text)
    """

    def __init__(self, max_size: int = 128, ttl_seconds: Optional[int] = None):
        self._max_size = max_size
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self._cache: OrderedDict[str, tuple[datetime, Any]] = OrderedDict()
        self._lock = Lock()

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _expired(self, stored_at: datetime, now: datetime) -> bool:
        return self._ttl is not None and now - stored_at > self._ttl

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or ``default`` if missing or expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return default

            stored_at, value = entry
            if self._expired(stored_at, self._now()):
                del self._cache[key]
                return default

            self._cache.move_to_end(key)
            return value

    def put(self, key: str, value: Any) -> None:
        """Store value under key. Evicts oldest if at capacity."""
        with self._lock:
            if key in self._cache:
                self._cache[key] = (self._now(), value)
                self._cache.move_to_end(key)
                return

            while len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)

            self._cache[key] = (self._now(), value)

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        """Number of entries, including possibly expired ones."""
        return len(self._cache)

    def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns number removed."""
        if not self._ttl:
            return 0

        with self._lock:
            now = self._now()
            expired_keys = [key for key, (stored_at, _) in self._cache.items() if self._expired(stored_at, now)]
            for key in expired_keys:
                del self._cache[key]
            return len(expired_keys)

    @property
    def stats(self) -> dict:
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self._max_size,
                "ttl_seconds": self._ttl.total_seconds() if self._ttl else None,
            }


_MISSING = object()

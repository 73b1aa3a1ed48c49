"""
Bounded TTL cache for remote archive metadata.

Each validator owns one MetadataCache. Access is serialized with a lock so a
validator instance can be shared by concurrent callers.
"""

import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

from seqcite.utils.logger import get_logger

logger = get_logger(__name__)

V = TypeVar("V")

DEFAULT_TTL_SECONDS = 24 * 3600
DEFAULT_MAX_ENTRIES = 1024


class MetadataCache(Generic[V]):
    """
    Thread-safe key/value cache with per-entry expiry.

    Expired entries are dropped when read. When the cache is full the oldest
    entry is evicted to make room.

    Examples:
        >>> cache = MetadataCache(ttl_seconds=60)
        >>> cache.set("SRR123456", {"title": "RNA-seq of liver"})
        >>> cache.get("SRR123456")
        {'title': 'RNA-seq of liver'}
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[V, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[V]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                logger.debug(f"Metadata cache entry expired: {key}")
                return None
            return value

    def set(self, key: str, value: V) -> None:
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Metadata cache full, evicted: {evicted}")
            self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def stats(self) -> Dict[str, float]:
        """Size and limits, for display."""
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self.max_entries,
                "ttl_seconds": self.ttl_seconds,
            }

"""Thread-safe in-memory cache with optional TTL.

Holds geocoding lookups so repeated commands for the same place do not
hit the external service again.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """In-memory cache implementing CachePort.

    Entries are evicted oldest-first once ``max_size`` is reached.

    Attributes:
        default_ttl_seconds: Time-to-live for entries (None = no expiry)
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            value, expiry = entry
            if time.time() > expiry:
                del self._store[key]
                self._logger.debug("Cache entry expired", extra={"key": key})
                return None
            return value

    def set(self, key: str, value: T) -> None:
        with self._lock:
            if (
                self.max_size is not None
                and self._store
                and len(self._store) >= self.max_size
                and key not in self._store
            ):
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                self._logger.debug(
                    "Cache evicted entry",
                    extra={"key": oldest_key, "reason": "max_size"},
                )

            ttl = self.default_ttl_seconds
            expiry = time.time() + ttl if ttl is not None else float("inf")
            self._store[key] = (value, expiry)

    def size(self) -> int:
        """Return the number of entries in the cache."""
        with self._lock:
            return len(self._store)

"""Key-value cache stores for feed snapshots."""

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple


class CacheStore(ABC):
    """Abstract key-value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read an entry.

        Args:
            key: Cache key

        Returns:
            Stored bytes, or None on a miss or when the entry has expired
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes, ttl: float) -> None:
        """
        Store an entry, replacing any previous value.

        Args:
            key: Cache key
            value: Bytes to store
            ttl: Lifetime in seconds
        """
        pass


class MemoryCacheStore(CacheStore):
    """In-process cache store.

    Each get and set holds the lock for the whole operation, so readers
    never observe a half-written entry. Concurrent writers simply replace
    one another.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store."""
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[bytes, float]] = {}

    def get(self, key: str) -> Optional[bytes]:
        """Read an entry, dropping it if it has expired."""
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            value, expires_at = item
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: bytes, ttl: float) -> None:
        """Store an entry that expires ``ttl`` seconds from now."""
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        with self._lock:
            self._entries[key] = (bytes(value), self._clock() + ttl)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

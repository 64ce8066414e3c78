"""Cache stores."""

from .store import CacheStore, MemoryCacheStore

__all__ = ["CacheStore", "MemoryCacheStore"]

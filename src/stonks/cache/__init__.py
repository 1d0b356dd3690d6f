"""Cache stores for market data."""

from stonks.cache.store import CacheStore, InMemoryCacheStore

__all__ = ["CacheStore", "InMemoryCacheStore"]

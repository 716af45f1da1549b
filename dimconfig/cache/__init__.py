"""Resolution cache and its backing stores."""

from dimconfig.cache.resolution_cache import (
    CacheStats,
    MergeMode,
    NullResolutionCache,
    ResolutionCache,
    create_resolution_cache,
)
from dimconfig.cache.store import CacheStore, LRUCacheStore, StoreFactory, lru_store_factory

__all__ = [
    "CacheStats",
    "CacheStore",
    "LRUCacheStore",
    "MergeMode",
    "NullResolutionCache",
    "ResolutionCache",
    "StoreFactory",
    "create_resolution_cache",
    "lru_store_factory",
]

"""Memoization of resolved config per (bundle, config, mode, context)."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NoReturn

from dimconfig.cache.store import CacheStore, StoreFactory, lru_store_factory
from dimconfig.config.models import CacheConfig
from dimconfig.context import Context, fingerprint
from dimconfig.errors import CacheMissReason, UnknownCacheDataError
from dimconfig.observability.metrics import CACHE_LOOKUPS


class MergeMode(str, Enum):
    """Resolution mode a cached value was produced with."""

    MERGE = "merge"
    NO_MERGE = "no-merge"


@dataclass(frozen=True)
class CacheStats:
    """Basic cache counters for diagnostics."""

    hits: int
    misses: int
    entries: int
    stores: int


class ResolutionCache:
    """Owned cache of resolved values.

    Layout is bundle -> config -> mode -> store, where each store maps a
    context fingerprint to the resolved value. Stores are created on first
    write through the injected store factory.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        store_factory: StoreFactory | None = None,
    ) -> None:
        self._config = config or CacheConfig()
        self._store_factory = store_factory or lru_store_factory
        self._stores: dict[str, dict[str, dict[MergeMode, CacheStore]]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, bundle: str, config: str, mode: MergeMode, context: Context | None) -> Any:
        """Return the cached value.

        Raises:
            UnknownCacheDataError: On any miss; ``reason`` tells which level missed
        """
        configs = self._stores.get(bundle)
        if configs is None:
            self._miss(bundle, config, mode, CacheMissReason.UNKNOWN_BUNDLE)
        modes = configs.get(config)
        if modes is None:
            self._miss(bundle, config, mode, CacheMissReason.UNKNOWN_CONFIG)
        store = modes.get(mode)
        if store is None:
            self._miss(bundle, config, mode, CacheMissReason.UNKNOWN_CACHE_DATA)

        try:
            value = store.get(fingerprint(context))
        except KeyError:
            self._miss(bundle, config, mode, CacheMissReason.UNKNOWN_CACHE_DATA)

        self._hits += 1
        CACHE_LOOKUPS.labels(mode=mode.value, outcome="hit").inc()
        return value

    def _miss(self, bundle: str, config: str, mode: MergeMode, reason: CacheMissReason) -> NoReturn:
        self._misses += 1
        CACHE_LOOKUPS.labels(mode=mode.value, outcome=reason.value).inc()
        raise UnknownCacheDataError(bundle, config, reason)

    def put(
        self,
        bundle: str,
        config: str,
        mode: MergeMode,
        context: Context | None,
        value: Any,
    ) -> Any:
        """Store value and return it."""
        modes = self._stores.setdefault(bundle, {}).setdefault(config, {})
        store = modes.get(mode)
        if store is None:
            store = modes[mode] = self._store_factory(self._config)
        store.set(fingerprint(context), value)
        return value

    def invalidate(self, bundle: str, config: str | None = None) -> bool:
        """Drop every cached value of a config, or of a whole bundle."""
        if config is None:
            return self._stores.pop(bundle, None) is not None

        configs = self._stores.get(bundle)
        if configs is None:
            return False
        removed = configs.pop(config, None) is not None
        if not configs:
            del self._stores[bundle]
        return removed

    def clear(self) -> None:
        self._stores.clear()

    def stats(self) -> CacheStats:
        stores = [
            store
            for configs in self._stores.values()
            for modes in configs.values()
            for store in modes.values()
        ]
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            entries=sum(len(store) for store in stores),
            stores=len(stores),
        )


class NullResolutionCache(ResolutionCache):
    """Cache that never stores anything; every lookup misses."""

    def put(
        self,
        bundle: str,  # noqa: ARG002
        config: str,  # noqa: ARG002
        mode: MergeMode,  # noqa: ARG002
        context: Context | None,  # noqa: ARG002
        value: Any,
    ) -> Any:
        return value


def create_resolution_cache(
    config: CacheConfig | None = None,
    store_factory: StoreFactory | None = None,
) -> ResolutionCache:
    """Create the cache described by config, honouring ``enabled``."""
    config = config or CacheConfig()
    if not config.enabled:
        return NullResolutionCache(config)
    return ResolutionCache(config, store_factory)

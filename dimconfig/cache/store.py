"""Bounded key/value stores backing the resolution cache."""

from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from dimconfig.config.models import CacheConfig


class CacheStore(ABC):
    """Abstract interface for a bounded cache store.

    Implementations decide the eviction policy. ``get`` raises KeyError on
    a miss so that None remains a cacheable value.
    """

    @abstractmethod
    def get(self, key: str) -> Any:
        """Get the value for key, raising KeyError if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, evicting as needed."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key, returning whether it was present."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        pass


class LRUCacheStore(CacheStore):
    """Least-recently-used store with a fixed maximum entry count."""

    def __init__(self, max_entries: int = 250) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self.evictions = 0
        self._entries: OrderedDict[str, Any] = OrderedDict()

    def get(self, key: str) -> Any:
        value = self._entries[key]
        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        self._entries[key] = value
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
            self.evictions += 1

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


_MISSING = object()

StoreFactory = Callable[[CacheConfig], CacheStore]


def lru_store_factory(config: CacheConfig) -> CacheStore:
    """Default store factory."""
    return LRUCacheStore(max_entries=config.max_entries)
